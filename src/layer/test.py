"""Tests for the layer tree model and its pure operations."""

import pydantic
import pytest

from src.core.errors import UIBuilderError, ValidationError

from .ids import ALPHABET, create_id
from .lib import (
    _rebuild,
    clone_with_new_ids,
    collect_ids,
    duplicate,
    duplicate_with_id,
    find_by_id,
    find_parent_of,
    find_path,
    insert,
    iter_layers,
    remove,
    reorder_children,
    update_payload,
)
from .models import ComponentLayer, TextLayer, TextType, is_text_layer

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def tree():
    """page(header, body(t1, btn)), footer."""
    return (
        ComponentLayer(
            id="page",
            type="Card",
            props={"title": "Home"},
            children=(
                ComponentLayer(id="header", type="Button", props={"size": "sm"}),
                ComponentLayer(
                    id="body",
                    type="Card",
                    children=(
                        TextLayer(id="t1", text="Hello"),
                        ComponentLayer(id="btn", type="Button"),
                    ),
                ),
            ),
        ),
        TextLayer(id="footer", text="(c) 2024", text_type=TextType.MARKDOWN),
    )


def _strip_ids(layer):
    """Structure and payload of a subtree, ids removed."""
    if isinstance(layer, TextLayer):
        return ("text", layer.text, layer.text_type)
    return (layer.type, layer.props, tuple(_strip_ids(c) for c in layer.children))


def _ids(layer):
    return [node.id for node in iter_layers((layer,))]


# =============================================================================
# Models
# =============================================================================


class TestModels:
    """Tests for layer models."""

    @pytest.mark.unit
    def test_children_become_tuple(self):
        layer = ComponentLayer(id="a", type="Card", children=[TextLayer(id="t")])
        assert isinstance(layer.children, tuple)
        assert is_text_layer(layer.children[0])

    @pytest.mark.unit
    def test_layers_are_frozen(self):
        layer = ComponentLayer(id="a", type="Card")
        with pytest.raises(pydantic.ValidationError):
            layer.type = "Button"

    @pytest.mark.unit
    def test_text_sentinel_reserved(self):
        with pytest.raises(pydantic.ValidationError):
            ComponentLayer(id="a", type="_text_")

    @pytest.mark.unit
    def test_text_type_from_string(self):
        layer = TextLayer(id="t", text="# Title", text_type="markdown")
        assert layer.text_type == TextType.MARKDOWN
        assert layer.type == "_text_"

    @pytest.mark.unit
    def test_children_validated_from_dicts(self):
        layer = ComponentLayer.model_validate(
            {
                "id": "a",
                "type": "Card",
                "children": [{"id": "t", "type": "_text_", "text": "hi"}],
            }
        )
        assert isinstance(layer.children[0], TextLayer)

    @pytest.mark.unit
    def test_props_are_read_only(self):
        layer = ComponentLayer(id="a", type="Card", props={"title": "Home"})
        with pytest.raises(TypeError):
            layer.props["title"] = "changed"
        with pytest.raises(TypeError):
            ComponentLayer(id="b", type="Card").props["title"] = "x"

    @pytest.mark.unit
    def test_props_detached_from_input(self):
        source = {"title": "Home"}
        layer = ComponentLayer(id="a", type="Card", props=source)
        source["title"] = "changed"
        assert layer.props == {"title": "Home"}

    @pytest.mark.unit
    def test_props_dump_as_dict(self):
        layer = ComponentLayer(id="a", type="Card", props={"title": "Home"})
        dumped = layer.model_dump()
        assert dumped["props"] == {"title": "Home"}
        assert type(dumped["props"]) is dict

    @pytest.mark.unit
    def test_default_text_type_stored_as_value(self):
        layer = TextLayer(id="t", text="Hi")
        assert type(layer.text_type) is str
        assert layer.text_type == "text"


# =============================================================================
# Ids
# =============================================================================


class TestCreateId:
    """Tests for id generation."""

    @pytest.mark.unit
    def test_default_length_and_alphabet(self, monkeypatch):
        monkeypatch.delenv("UI_BUILDER_ID_LENGTH", raising=False)
        new_id = create_id()
        assert len(new_id) == 7
        assert set(new_id) <= set(ALPHABET)

    @pytest.mark.unit
    def test_avoids_existing(self):
        taken = set(ALPHABET) - {"z"}
        assert create_id(taken, length=1) == "z"

    @pytest.mark.unit
    def test_exhausted_space_raises(self):
        with pytest.raises(UIBuilderError):
            create_id(set(ALPHABET), length=1)


# =============================================================================
# Queries
# =============================================================================


class TestQueries:
    """Tests for find operations."""

    @pytest.mark.unit
    def test_iter_layers_preorder(self, tree):
        assert [layer.id for layer in iter_layers(tree)] == [
            "page",
            "header",
            "body",
            "t1",
            "btn",
            "footer",
        ]

    @pytest.mark.unit
    def test_find_path(self, tree):
        assert find_path(tree, "btn") == (0, 1, 1)
        assert find_path(tree, "footer") == (1,)
        assert find_path(tree, "nope") is None

    @pytest.mark.unit
    def test_find_by_id(self, tree):
        assert find_by_id(tree, "t1").text == "Hello"
        assert find_by_id(tree, "nope") is None
        assert find_by_id(tree, None) is None
        assert find_by_id(tree, "") is None

    @pytest.mark.unit
    def test_find_parent_of(self, tree):
        assert find_parent_of(tree, "btn").id == "body"
        assert find_parent_of(tree, "header").id == "page"
        assert find_parent_of(tree, "page") is None
        assert find_parent_of(tree, "nope") is None

    @pytest.mark.unit
    def test_collect_ids(self, tree):
        assert collect_ids(tree) == {"page", "header", "body", "t1", "btn", "footer"}


# =============================================================================
# Insert
# =============================================================================


class TestInsert:
    """Tests for insert."""

    @pytest.mark.unit
    def test_append_to_empty_roots(self):
        layer = ComponentLayer(id="a", type="Card")
        assert insert((), layer) == (layer,)

    @pytest.mark.unit
    def test_root_position(self, tree):
        layer = ComponentLayer(id="new", type="Card")
        result = insert(tree, layer, position=0)
        assert [node.id for node in result] == ["new", "page", "footer"]

    @pytest.mark.unit
    def test_position_past_end_appends(self, tree):
        layer = TextLayer(id="new")
        result = insert(tree, layer, parent_id="body", position=99)
        assert [c.id for c in find_by_id(result, "body").children] == [
            "t1",
            "btn",
            "new",
        ]

    @pytest.mark.unit
    def test_insert_at_position_in_parent(self, tree):
        layer = TextLayer(id="new")
        result = insert(tree, layer, parent_id="body", position=1)
        assert [c.id for c in find_by_id(result, "body").children] == [
            "t1",
            "new",
            "btn",
        ]
        assert find_by_id(result, "new") == layer

    @pytest.mark.unit
    def test_missing_parent_is_noop(self, tree):
        assert insert(tree, TextLayer(id="new"), parent_id="nope") is tree

    @pytest.mark.unit
    def test_text_parent_is_noop(self, tree):
        assert insert(tree, TextLayer(id="new"), parent_id="t1") is tree

    @pytest.mark.unit
    def test_strict_mode_raises(self, tree):
        with pytest.raises(ValidationError):
            insert(tree, TextLayer(id="new"), parent_id="nope", strict=True)
        with pytest.raises(ValidationError):
            insert(tree, TextLayer(id="new"), parent_id="t1", strict=True)

    @pytest.mark.unit
    def test_input_untouched_and_siblings_shared(self, tree):
        result = insert(tree, TextLayer(id="new"), parent_id="body")
        assert find_by_id(tree, "new") is None
        assert len(find_by_id(tree, "body").children) == 2
        assert find_by_id(result, "header") is find_by_id(tree, "header")
        assert result[1] is tree[1]
        assert result[0] is not tree[0]


# =============================================================================
# Remove
# =============================================================================


class TestRemove:
    """Tests for remove."""

    @pytest.mark.unit
    def test_removes_subtree(self, tree):
        result = remove(tree, "body")
        assert collect_ids(result) == {"page", "header", "footer"}

    @pytest.mark.unit
    def test_remove_root(self, tree):
        result = remove(tree, "page")
        assert [node.id for node in result] == ["footer"]
        assert result[0] is tree[1]

    @pytest.mark.unit
    def test_missing_id_is_noop(self, tree):
        assert remove(tree, "nope") is tree


# =============================================================================
# Duplicate
# =============================================================================


class TestDuplicate:
    """Tests for duplicate."""

    @pytest.mark.unit
    def test_copy_appended_to_parent(self, tree):
        result, copy_id = duplicate_with_id(tree, "header")
        children = find_by_id(result, "page").children
        assert [c.id for c in children][:2] == ["header", "body"]
        assert children[-1].id == copy_id
        assert len(children) == 3

    @pytest.mark.unit
    def test_copy_isomorphic_with_fresh_ids(self, tree):
        result, copy_id = duplicate_with_id(tree, "body")
        original = find_by_id(result, "body")
        copy = find_by_id(result, copy_id)
        assert _strip_ids(copy) == _strip_ids(original)
        assert not set(_ids(copy)) & collect_ids(tree)
        assert len(collect_ids(result)) == len(list(iter_layers(result)))

    @pytest.mark.unit
    def test_root_duplicate_appended_to_roots(self, tree):
        result, copy_id = duplicate_with_id(tree, "page")
        assert [node.id for node in result][:2] == ["page", "footer"]
        assert result[-1].id == copy_id

    @pytest.mark.unit
    def test_copy_props_independent(self, tree):
        result, copy_id = duplicate_with_id(tree, "header")
        assert find_by_id(result, copy_id).props is not find_by_id(
            result, "header"
        ).props

    @pytest.mark.unit
    def test_copy_nested_props_independent(self):
        rows = [{"id": "1", "amount": 5}]
        tree = (ComponentLayer(id="table", type="Transactions", props={"data": rows}),)
        result, copy_id = duplicate_with_id(tree, "table")
        original = find_by_id(result, "table").props["data"]
        copied = find_by_id(result, copy_id).props["data"]
        assert copied == original
        assert copied is not original
        assert copied[0] is not original[0]

    @pytest.mark.unit
    def test_missing_id_is_noop(self, tree):
        assert duplicate(tree, "nope") is tree
        assert duplicate_with_id(tree, "nope") == (tree, None)

    @pytest.mark.unit
    def test_clone_avoids_existing(self):
        layer = ComponentLayer(id="a", type="Card", children=(TextLayer(id="b"),))
        taken = set(ALPHABET) - {"x", "y"}
        clone = clone_with_new_ids(layer, taken, id_length=1)
        assert sorted(_ids(clone)) == ["x", "y"]


# =============================================================================
# Update
# =============================================================================


class TestUpdatePayload:
    """Tests for update_payload."""

    @pytest.mark.unit
    def test_props_shallow_merge(self, tree):
        result = update_payload(tree, "page", {"title": "New", "tone": "warm"})
        assert find_by_id(result, "page").props == {"title": "New", "tone": "warm"}
        assert find_by_id(tree, "page").props == {"title": "Home"}

    @pytest.mark.unit
    def test_text_override(self, tree):
        result = update_payload(tree, "t1", {"text": "Bye"})
        layer = find_by_id(result, "t1")
        assert layer.text == "Bye"
        assert layer.text_type == TextType.TEXT

    @pytest.mark.unit
    def test_text_type_override(self, tree):
        result = update_payload(tree, "t1", {"textType": "markdown"})
        layer = find_by_id(result, "t1")
        assert layer.text == "Hello"
        assert layer.text_type == TextType.MARKDOWN

    @pytest.mark.unit
    def test_empty_text_applied(self, tree):
        result = update_payload(tree, "t1", {"text": ""})
        assert find_by_id(result, "t1").text == ""

    @pytest.mark.unit
    def test_invalid_text_type_rejected(self, tree):
        with pytest.raises(ValueError):
            update_payload(tree, "t1", {"text_type": "html"})

    @pytest.mark.unit
    def test_none_keeps_current_text(self, tree):
        result = update_payload(tree, "footer", {"text": None, "text_type": None})
        layer = find_by_id(result, "footer")
        assert (layer.text, layer.text_type) == ("(c) 2024", "markdown")

    @pytest.mark.unit
    def test_non_string_text_rejected(self, tree):
        with pytest.raises(ValueError):
            update_payload(tree, "t1", {"text": 5})

    @pytest.mark.unit
    def test_updated_props_read_only(self, tree):
        result = update_payload(tree, "page", {"tone": "warm"})
        with pytest.raises(TypeError):
            find_by_id(result, "page").props["tone"] = "cold"

    @pytest.mark.unit
    def test_missing_id_is_noop(self, tree):
        assert update_payload(tree, "nope", {"a": 1}) is tree


# =============================================================================
# Reorder
# =============================================================================


class TestReorderChildren:
    """Tests for reorder_children."""

    @pytest.mark.unit
    def test_exact_permutation(self, tree):
        result = reorder_children(tree, "body", ["btn", "t1"])
        assert [c.id for c in find_by_id(result, "body").children] == ["btn", "t1"]

    @pytest.mark.unit
    def test_omitted_child_dropped(self, tree):
        result = reorder_children(tree, "body", ["btn"])
        assert [c.id for c in find_by_id(result, "body").children] == ["btn"]
        assert find_by_id(result, "t1") is None

    @pytest.mark.unit
    def test_unknown_id_skipped(self, tree):
        result = reorder_children(tree, "body", ["ghost", "t1", "btn"])
        assert [c.id for c in find_by_id(result, "body").children] == ["t1", "btn"]

    @pytest.mark.unit
    def test_repeated_id_kept_once(self, tree):
        result = reorder_children(tree, "body", ["btn", "btn", "t1"])
        assert [c.id for c in find_by_id(result, "body").children] == ["btn", "t1"]

    @pytest.mark.unit
    def test_missing_or_text_parent_is_noop(self, tree):
        assert reorder_children(tree, "nope", []) is tree
        assert reorder_children(tree, "t1", []) is tree

    @pytest.mark.unit
    def test_strict_requires_permutation(self, tree):
        with pytest.raises(ValidationError):
            reorder_children(tree, "body", ["btn"], strict=True)
        with pytest.raises(ValidationError):
            reorder_children(tree, "nope", [], strict=True)
        result = reorder_children(tree, "body", ["btn", "t1"], strict=True)
        assert [c.id for c in find_by_id(result, "body").children] == ["btn", "t1"]


# =============================================================================
# Copy-on-write rebuild
# =============================================================================


class TestRebuild:
    """Tests for the index-path rebuild helper."""

    @pytest.mark.unit
    def test_path_through_text_layer_raises(self, tree):
        with pytest.raises(TypeError):
            _rebuild(tree, (1, 0), lambda _: ())

    @pytest.mark.unit
    def test_only_ancestors_copied(self, tree):
        result = _rebuild(tree, (0, 1, 0), lambda _: ())
        assert result[1] is tree[1]
        assert result[0].children[0] is tree[0].children[0]
        assert [c.id for c in result[0].children[1].children] == ["btn"]
