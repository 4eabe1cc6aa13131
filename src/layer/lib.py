"""Pure structural operations on a layer tree.

Every operation takes a tree (a tuple of root layers) and returns a new
tree; nothing is mutated in place. Edits locate the index path to their
target once, then rebuild only the ancestors on that path. Sibling subtrees
are shared between the old and new tree.

Operations that reference a missing id, or a parent that cannot hold
children, return the input tree unchanged (the same object). ``insert`` and
``reorder_children`` accept ``strict=True`` to raise ``ValidationError``
instead.

Example:
    >>> from src.layer import ComponentLayer, insert, find_by_id
    >>> tree = insert((), ComponentLayer(id="a", type="Card"))
    >>> find_by_id(tree, "a").type
    'Card'
"""

import copy
import logging
from typing import Any, Callable, Collection, Iterator, Mapping, Sequence

from src.core.errors import ValidationError

from .ids import create_id
from .models import (
    ComponentLayer,
    Layer,
    LayerTree,
    TextLayer,
    TextType,
    freeze_props,
)

logger = logging.getLogger(__name__)

IndexPath = tuple[int, ...]


# =============================================================================
# Queries
# =============================================================================


def iter_layers(tree: Sequence[Layer]) -> Iterator[Layer]:
    """Walk all layers depth-first, pre-order."""
    for layer in tree:
        yield layer
        if isinstance(layer, ComponentLayer):
            yield from iter_layers(layer.children)


def collect_ids(tree: Sequence[Layer]) -> set[str]:
    """Collect every layer id in the tree."""
    return {layer.id for layer in iter_layers(tree)}


def find_path(tree: Sequence[Layer], layer_id: str) -> IndexPath | None:
    """Find the index path from the roots to a layer.

    Depth-first, pre-order; the first match wins.

    Returns:
        Tuple of child indexes, or None if the id is not in the tree.
    """
    for index, layer in enumerate(tree):
        if layer.id == layer_id:
            return (index,)
        if isinstance(layer, ComponentLayer) and layer.children:
            sub_path = find_path(layer.children, layer_id)
            if sub_path is not None:
                return (index, *sub_path)
    return None


def layer_at(tree: Sequence[Layer], path: IndexPath) -> Layer:
    """Resolve an index path produced by ``find_path``."""
    children: Sequence[Layer] = tree
    layer: Layer | None = None
    for index in path:
        layer = children[index]
        children = layer.children if isinstance(layer, ComponentLayer) else ()
    if layer is None:
        raise IndexError("Empty index path")
    return layer


def find_by_id(tree: Sequence[Layer], layer_id: str | None) -> Layer | None:
    """Find a layer by id.

    Returns:
        The layer, or None if ``layer_id`` is empty or not found.
    """
    if not layer_id:
        return None
    path = find_path(tree, layer_id)
    return layer_at(tree, path) if path is not None else None


def find_parent_of(tree: Sequence[Layer], layer_id: str) -> ComponentLayer | None:
    """Find the component layer whose direct children contain ``layer_id``.

    Returns:
        The parent, or None when the layer is a root or not found.
    """
    path = find_path(tree, layer_id)
    if path is None or len(path) == 1:
        return None
    return _as_component(layer_at(tree, path[:-1]))


def _as_component(layer: Layer) -> ComponentLayer:
    if not isinstance(layer, ComponentLayer):
        raise TypeError(f"Layer '{layer.id}' is not a component layer")
    return layer


# =============================================================================
# Copy-on-write rebuild
# =============================================================================


def _rebuild(
    layers: LayerTree,
    path: IndexPath,
    replace: Callable[[Layer], Sequence[Layer]],
) -> LayerTree:
    """Rebuild ``layers`` with the node at ``path`` replaced.

    ``replace`` returns the sequence that takes the target's place: empty to
    delete it, one layer to swap it. Only ancestors on the path are copied.
    """
    index, rest = path[0], path[1:]
    target = layers[index]
    if rest:
        updated = _as_component(target).model_copy(
            update={"children": _rebuild(target.children, rest, replace)}
        )
        replacement: tuple[Layer, ...] = (updated,)
    else:
        replacement = tuple(replace(target))
    return layers[:index] + replacement + layers[index + 1 :]


def _splice(children: LayerTree, layer: Layer, position: int | None) -> LayerTree:
    items = list(children)
    if position is None:
        items.append(layer)
    else:
        items.insert(position, layer)
    return tuple(items)


# =============================================================================
# Mutations
# =============================================================================


def insert(
    tree: LayerTree,
    layer: Layer,
    parent_id: str | None = None,
    position: int | None = None,
    *,
    strict: bool = False,
) -> LayerTree:
    """Insert a layer under a parent, or at the root.

    Position follows list-insert semantics: an index past the end appends,
    a negative index counts from the end, None appends.

    Args:
        tree: Current tree.
        layer: Layer to insert.
        parent_id: Component layer to insert into. None targets the roots.
        position: Index within the target's children.
        strict: Raise instead of returning the tree unchanged.

    Returns:
        New tree, or ``tree`` itself when the parent is missing or a text layer.

    Raises:
        ValidationError: In strict mode, if the parent cannot take children.
    """
    if parent_id is None:
        return _splice(tuple(tree), layer, position)

    path = find_path(tree, parent_id)
    if path is None:
        return _noop(tree, f"insert: parent '{parent_id}' not found", strict)
    if not isinstance(layer_at(tree, path), ComponentLayer):
        return _noop(tree, f"insert: parent '{parent_id}' is a text layer", strict)

    def add_child(target: Layer) -> tuple[Layer]:
        parent = _as_component(target)
        children = _splice(parent.children, layer, position)
        return (parent.model_copy(update={"children": children}),)

    logger.debug("Inserting layer '%s' into '%s'", layer.id, parent_id)
    return _rebuild(tuple(tree), path, add_child)


def remove(tree: LayerTree, layer_id: str) -> LayerTree:
    """Remove a layer and its entire subtree.

    Returns:
        New tree, or ``tree`` itself when the id is not found.
    """
    path = find_path(tree, layer_id)
    if path is None:
        return _noop(tree, f"remove: layer '{layer_id}' not found")
    logger.debug("Removing layer '%s'", layer_id)
    return _rebuild(tuple(tree), path, lambda _: ())


def clone_with_new_ids(
    layer: Layer,
    existing: Collection[str] = (),
    id_length: int | None = None,
) -> Layer:
    """Deep-copy a subtree, giving every node a fresh id.

    New ids avoid ``existing`` and each other.
    """
    taken = set(existing)

    def clone(node: Layer) -> Layer:
        new_id = create_id(taken, id_length)
        taken.add(new_id)
        if isinstance(node, TextLayer):
            return node.model_copy(update={"id": new_id})
        return node.model_copy(
            update={
                "id": new_id,
                "props": freeze_props(copy.deepcopy(dict(node.props))),
                "children": tuple(clone(child) for child in node.children),
            }
        )

    return clone(layer)


def duplicate_with_id(
    tree: LayerTree,
    layer_id: str,
    id_length: int | None = None,
) -> tuple[LayerTree, str | None]:
    """Duplicate a subtree and report the copy's root id.

    The copy is appended to the original's parent (or to the roots).

    Returns:
        ``(new_tree, copy_id)``, or ``(tree, None)`` when the id is not found.
    """
    path = find_path(tree, layer_id)
    if path is None:
        return _noop(tree, f"duplicate: layer '{layer_id}' not found"), None

    clone = clone_with_new_ids(layer_at(tree, path), collect_ids(tree), id_length)
    if len(path) == 1:
        logger.debug("Duplicating root layer '%s' as '%s'", layer_id, clone.id)
        return _splice(tuple(tree), clone, None), clone.id

    def add_sibling(target: Layer) -> tuple[Layer]:
        parent = _as_component(target)
        children = _splice(parent.children, clone, None)
        return (parent.model_copy(update={"children": children}),)

    logger.debug("Duplicating layer '%s' as '%s'", layer_id, clone.id)
    return _rebuild(tuple(tree), path[:-1], add_sibling), clone.id


def duplicate(tree: LayerTree, layer_id: str, id_length: int | None = None) -> LayerTree:
    """Duplicate a subtree with fresh ids, appended as a sibling.

    Returns:
        New tree, or ``tree`` itself when the id is not found.
    """
    return duplicate_with_id(tree, layer_id, id_length)[0]


def _first_set(payload: Mapping[str, Any], *keys: str, default: Any) -> Any:
    # None counts as absent
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return default


def _update_text(layer: TextLayer, payload: Mapping[str, Any]) -> TextLayer:
    text = _first_set(payload, "text", default=layer.text)
    raw_type = _first_set(payload, "text_type", "textType", default=layer.text_type)
    text_type = TextType(raw_type)
    return TextLayer.model_validate(
        {**layer.model_dump(), "text": text, "text_type": text_type.value}
    )


def update_payload(
    tree: LayerTree, layer_id: str, payload: Mapping[str, Any]
) -> LayerTree:
    """Update a layer's payload.

    Component layers shallow-merge ``payload`` into their props (later keys
    win). Text layers read optional ``text`` and ``text_type`` (or
    ``textType``) overrides and keep existing values otherwise.

    A ``None`` text or text type keeps the current value.

    Returns:
        New tree, or ``tree`` itself when the id is not found.

    Raises:
        ValueError: If a text layer receives an unknown text type or
            non-string text.
    """
    path = find_path(tree, layer_id)
    if path is None:
        return _noop(tree, f"update: layer '{layer_id}' not found")

    def apply(layer: Layer) -> tuple[Layer]:
        if isinstance(layer, TextLayer):
            return (_update_text(layer, payload),)
        merged = freeze_props({**layer.props, **payload})
        return (layer.model_copy(update={"props": merged}),)

    logger.debug("Updating layer '%s' (%s)", layer_id, ", ".join(payload))
    return _rebuild(tuple(tree), path, apply)


def reorder_children(
    tree: LayerTree,
    parent_id: str,
    ordered_ids: Sequence[str],
    *,
    strict: bool = False,
) -> LayerTree:
    """Replace a parent's children with those named in ``ordered_ids``.

    Children missing from ``ordered_ids`` are dropped; ids that match no
    child are skipped; a repeated id is kept at its first position only.

    Args:
        tree: Current tree.
        parent_id: Component layer whose children are reordered.
        ordered_ids: Child ids in their new order.
        strict: Raise unless ``ordered_ids`` is an exact permutation of the
            parent's child ids.

    Returns:
        New tree, or ``tree`` itself when the parent is missing or a text layer.

    Raises:
        ValidationError: In strict mode, for a bad parent or id list.
    """
    path = find_path(tree, parent_id)
    if path is None:
        return _noop(tree, f"reorder: parent '{parent_id}' not found", strict)
    parent = layer_at(tree, path)
    if not isinstance(parent, ComponentLayer):
        return _noop(tree, f"reorder: parent '{parent_id}' is a text layer", strict)

    current_ids = [child.id for child in parent.children]
    if strict and (
        len(ordered_ids) != len(current_ids)
        or sorted(ordered_ids) != sorted(current_ids)
    ):
        raise ValidationError(
            f"reorder: {list(ordered_ids)} is not a permutation of the children "
            f"of '{parent_id}' {current_ids}"
        )

    by_id: dict[str, Layer] = {}
    for child in parent.children:
        by_id.setdefault(child.id, child)

    reordered: list[Layer] = []
    seen: set[str] = set()
    for child_id in ordered_ids:
        if child_id in by_id and child_id not in seen:
            seen.add(child_id)
            reordered.append(by_id[child_id])

    dropped = len(current_ids) - len(reordered)
    if dropped:
        logger.debug("Reorder of '%s' dropped %d child(ren)", parent_id, dropped)

    def apply(layer: Layer) -> tuple[Layer]:
        return (layer.model_copy(update={"children": tuple(reordered)}),)

    return _rebuild(tuple(tree), path, apply)


def _noop(tree: LayerTree, reason: str, strict: bool = False) -> LayerTree:
    if strict:
        raise ValidationError(reason)
    logger.debug("No-op %s", reason)
    return tree


__all__ = [
    "IndexPath",
    # Queries
    "iter_layers",
    "collect_ids",
    "find_path",
    "layer_at",
    "find_by_id",
    "find_parent_of",
    # Mutations
    "insert",
    "remove",
    "clone_with_new_ids",
    "duplicate",
    "duplicate_with_id",
    "update_payload",
    "reorder_children",
]
