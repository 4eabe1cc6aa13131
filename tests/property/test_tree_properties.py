"""Property tests for the layer tree operations and default derivation."""

from __future__ import annotations

import itertools
import json

from hypothesis import given, settings
from hypothesis import strategies as st

from src.layer import (
    ComponentLayer,
    Layer,
    LayerTree,
    TextLayer,
    collect_ids,
    duplicate_with_id,
    find_by_id,
    insert,
    iter_layers,
    remove,
    reorder_children,
    update_payload,
)
from src.schema import (
    array,
    boolean,
    date,
    derive,
    literal,
    normalize,
    nullable,
    number,
    obj,
    optional,
    string,
    tuple_,
    union,
)
from src.validation import is_valid_tree

# A tree outline: None is a text leaf, a list is a component with children.
_outline = st.recursive(
    st.none(),
    lambda children: st.lists(children, max_size=4),
    max_leaves=20,
)


def _build(outlines: list, counter: itertools.count) -> LayerTree:
    layers: list[Layer] = []
    for outline in outlines:
        layer_id = f"n{next(counter)}"
        if outline is None:
            layers.append(TextLayer(id=layer_id, text=layer_id))
        else:
            layers.append(
                ComponentLayer(
                    id=layer_id,
                    type="Box",
                    props={"label": layer_id},
                    children=_build(outline, counter),
                )
            )
    return tuple(layers)


trees = st.lists(_outline, max_size=4).map(lambda o: _build(o, itertools.count()))


def _strip_ids(layer: Layer) -> tuple:
    if isinstance(layer, TextLayer):
        return ("text", layer.text, layer.text_type)
    return (layer.type, layer.props, tuple(_strip_ids(c) for c in layer.children))


def _components(tree: LayerTree) -> list[ComponentLayer]:
    return [layer for layer in iter_layers(tree) if isinstance(layer, ComponentLayer)]


@given(trees)
def test_generated_trees_are_valid(tree):
    assert is_valid_tree(tree)


@given(trees)
def test_missing_id_operations_return_same_tree(tree):
    layer = TextLayer(id="new")
    assert remove(tree, "absent") is tree
    assert insert(tree, layer, "absent") is tree
    assert update_payload(tree, "absent", {"x": 1}) is tree
    assert reorder_children(tree, "absent", []) is tree


@given(st.data())
def test_insert_then_find_round_trip(data):
    tree = data.draw(trees)
    parents = _components(tree)
    parent_id = data.draw(st.sampled_from([None] + [p.id for p in parents]))
    position = data.draw(st.none() | st.integers(min_value=-5, max_value=5))
    layer = ComponentLayer(id="fresh", type="Box")

    result = insert(tree, layer, parent_id, position)

    assert find_by_id(result, "fresh") == layer
    assert len(collect_ids(result)) == len(collect_ids(tree)) + 1


@given(st.data())
def test_duplicate_is_isomorphic_with_disjoint_ids(data):
    tree = data.draw(trees.filter(bool))
    target = data.draw(st.sampled_from(list(iter_layers(tree))))

    result, copy_id = duplicate_with_id(tree, target.id)

    copy = find_by_id(result, copy_id)
    assert _strip_ids(copy) == _strip_ids(target)
    copy_ids = collect_ids((copy,))
    assert copy_ids.isdisjoint(collect_ids(tree))
    assert is_valid_tree(result)


@given(st.data())
def test_reorder_with_permutation_keeps_exact_order(data):
    tree = data.draw(trees.filter(lambda t: bool(_components(t))))
    parent = data.draw(st.sampled_from(_components(tree)))
    ids = [child.id for child in parent.children]
    order = data.draw(st.permutations(ids))

    result = reorder_children(tree, parent.id, order, strict=True)

    assert [c.id for c in find_by_id(result, parent.id).children] == list(order)


@given(st.data())
def test_reorder_ignores_non_child_ids(data):
    tree = data.draw(trees.filter(lambda t: bool(_components(t))))
    parent = data.draw(st.sampled_from(_components(tree)))
    ids = [child.id for child in parent.children]
    order = data.draw(st.permutations(ids + ["ghost"]))

    result = reorder_children(tree, parent.id, order)

    assert [c.id for c in find_by_id(result, parent.id).children] == [
        i for i in order if i != "ghost"
    ]


@given(st.data())
def test_update_shares_untouched_siblings(data):
    tree = data.draw(trees.filter(lambda t: len(t) > 1))
    index = data.draw(st.integers(min_value=0, max_value=len(tree) - 1))
    target = tree[index]

    result = update_payload(tree, target.id, {"text": "changed", "label": "x"})

    for i, (before, after) in enumerate(zip(tree, result)):
        if i != index:
            assert after is before


_leaf_shapes = st.sampled_from(
    [
        string(),
        number(),
        boolean(),
        date(),
        union(literal("a"), literal("b")),
        optional(string()),
        nullable(number()),
    ]
)

_shapes = st.recursive(
    _leaf_shapes,
    lambda inner: st.one_of(
        st.builds(array, inner),
        st.lists(inner, min_size=1, max_size=3).map(lambda items: tuple_(*items)),
        st.dictionaries(
            st.sampled_from(["a", "b", "c", "d"]), inner, min_size=1
        ).map(lambda fields: obj(**fields)),
    ),
    max_leaves=8,
)

_object_shapes = st.dictionaries(
    st.sampled_from(["alpha", "beta", "gamma", "delta"]), _shapes, min_size=1
).map(lambda fields: obj(**fields))


@settings(max_examples=50)
@given(_object_shapes, st.integers(min_value=0, max_value=2**32 - 1))
def test_derive_is_deterministic(shape, seed):
    normalized = normalize(shape)
    first = json.dumps(derive(normalized, seed=seed), default=str, sort_keys=True)
    second = json.dumps(derive(normalized, seed=seed), default=str, sort_keys=True)
    assert first == second
