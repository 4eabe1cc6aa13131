"""Tests for the session store."""

import logging

import pytest

from src.core.errors import (
    SchemaDerivationError,
    UnknownComponentTypeError,
    ValidationError,
)
from src.layer import ComponentLayer, TextLayer
from src.registry import RegistryEntry
from src.schema import any_, obj

from .lib import LayerStore


class TestLifecycle:
    """Construction, listing and reset."""

    @pytest.mark.unit
    def test_starts_empty(self, store):
        assert store.layers == ()
        assert store.selected_layer_id is None
        assert store.selected_layer is None

    @pytest.mark.unit
    def test_components_lists_registry(self, store):
        assert [c.name for c in store.components] == [
            "Button",
            "Badge",
            "Transactions",
            "Card",
        ]

    @pytest.mark.unit
    def test_reset(self, store):
        layer_id = store.add_component_layer("Card")
        store.select_layer(layer_id)
        store.reset()
        assert store.layers == ()
        assert store.selected_layer_id is None

    @pytest.mark.unit
    def test_stores_are_independent(self, registry):
        a = LayerStore(registry)
        b = LayerStore(registry)
        a.add_component_layer("Button")
        assert b.layers == ()

    @pytest.mark.unit
    def test_strict_from_environment(self, registry, monkeypatch):
        monkeypatch.setenv("UI_BUILDER_STRICT", "true")
        store = LayerStore(registry)
        with pytest.raises(ValidationError):
            store.add_component_layer("Button", parent_id="missing")


class TestAddComponentLayer:
    """Instantiating registered components."""

    @pytest.mark.unit
    def test_button_has_only_required_props(self, store):
        layer_id = store.add_component_layer("Button")
        assert len(store.layers) == 1
        layer = store.layers[0]
        assert isinstance(layer, ComponentLayer)
        assert layer.id == layer_id
        assert layer.type == "Button"
        assert layer.props == {}
        assert layer.children == ()

    @pytest.mark.unit
    def test_required_props_derived(self, store):
        store.add_component_layer("Card")
        props = store.layers[0].props
        assert list(props) == ["title"]
        assert isinstance(props["title"], str)

    @pytest.mark.unit
    def test_nested_rows_derived(self, store):
        store.add_component_layer("Transactions")
        rows = store.layers[0].props["data"]
        assert 1 <= len(rows) <= 3
        assert all({"id", "customer", "email"} <= set(row) for row in rows)

    @pytest.mark.unit
    def test_children_prop_stripped(self, registry):
        registry.register(RegistryEntry("Label", None, obj(children=obj())))
        store = LayerStore(registry)
        store.add_component_layer("Label")
        assert "children" not in store.layers[0].props

    @pytest.mark.unit
    def test_insert_into_parent(self, store):
        card = store.add_component_layer("Card")
        button = store.add_component_layer("Button", parent_id=card)
        badge = store.add_component_layer("Badge", parent_id=card, position=0)
        assert [c.id for c in store.layers[0].children] == [badge, button]

    @pytest.mark.unit
    def test_missing_parent_is_noop(self, store):
        assert store.add_component_layer("Button", parent_id="missing") is None
        assert store.layers == ()

    @pytest.mark.unit
    def test_text_parent_is_noop(self, store):
        text = store.add_text_layer("hi")
        before = store.layers
        assert store.add_component_layer("Button", parent_id=text) is None
        assert store.layers is before

    @pytest.mark.unit
    def test_unknown_type_fails_fast(self, store):
        with pytest.raises(UnknownComponentTypeError):
            store.add_component_layer("Carousel")
        assert store.layers == ()

    @pytest.mark.unit
    def test_derivation_failure_propagates(self, registry, caplog):
        registry.register(RegistryEntry("Chart", None, obj(payload=any_())))
        store = LayerStore(registry)
        with caplog.at_level(logging.WARNING, logger="src.store.lib"):
            with pytest.raises(SchemaDerivationError) as exc_info:
                store.add_component_layer("Chart")
        assert exc_info.value.path == "payload"
        assert "Chart" in caplog.text
        assert store.layers == ()

    @pytest.mark.unit
    def test_add_does_not_change_selection(self, store):
        card = store.add_component_layer("Card")
        store.select_layer(card)
        store.add_component_layer("Button")
        assert store.selected_layer_id == card

    @pytest.mark.unit
    def test_ids_unique(self, registry):
        store = LayerStore(registry, id_length=2)
        ids = [store.add_component_layer("Button") for _ in range(50)]
        assert len(set(ids)) == 50
        assert all(len(i) == 2 for i in ids)

    @pytest.mark.unit
    def test_same_seed_same_props(self, registry):
        a = LayerStore(registry, seed=7)
        b = LayerStore(registry, seed=7)
        a.add_component_layer("Transactions")
        b.add_component_layer("Transactions")
        assert a.layers[0].props == b.layers[0].props


class TestAddTextLayer:
    """Text layers."""

    @pytest.mark.unit
    def test_defaults(self, store):
        layer_id = store.add_text_layer("Hello")
        layer = store.find_layer_by_id(layer_id)
        assert isinstance(layer, TextLayer)
        assert layer.text == "Hello"
        assert layer.text_type == "text"

    @pytest.mark.unit
    def test_markdown(self, store):
        card = store.add_component_layer("Card")
        layer_id = store.add_text_layer("**bold**", "markdown", parent_id=card)
        assert store.find_layer_by_id(layer_id).text_type == "markdown"
        assert store.layers[0].children[0].id == layer_id

    @pytest.mark.unit
    def test_invalid_text_type(self, store):
        with pytest.raises(ValueError):
            store.add_text_layer("x", "html")


class TestRemoveLayer:
    """Removal and selection redirection."""

    @pytest.mark.unit
    def test_selects_parent(self, store):
        a = store.add_component_layer("Card")
        b = store.add_component_layer("Button", parent_id=a)
        store.select_layer(b)
        store.remove_layer(b)
        assert store.selected_layer_id == a
        store.remove_layer(a)
        assert store.selected_layer_id is None
        assert store.layers == ()

    @pytest.mark.unit
    def test_root_removal_selects_first_root_component(self, store):
        text = store.add_text_layer("intro")
        a = store.add_component_layer("Card")
        b = store.add_component_layer("Badge")
        store.remove_layer(a)
        assert store.selected_layer_id == b
        assert store.find_layer_by_id(text) is not None

    @pytest.mark.unit
    def test_only_text_left_clears_selection(self, store):
        store.add_text_layer("intro")
        a = store.add_component_layer("Card")
        store.select_layer(a)
        store.remove_layer(a)
        assert store.selected_layer_id is None

    @pytest.mark.unit
    def test_unknown_id_is_noop(self, store):
        a = store.add_component_layer("Card")
        store.select_layer(a)
        before = store.layers
        store.remove_layer("missing")
        assert store.layers is before
        assert store.selected_layer_id == a


class TestDuplicateLayer:
    """Duplication through the store."""

    @pytest.mark.unit
    def test_duplicate_subtree(self, store):
        card = store.add_component_layer("Card")
        store.add_text_layer("Hello", parent_id=card)
        copy_id = store.duplicate_layer(card)
        assert copy_id is not None and copy_id != card
        assert [layer.id for layer in store.layers] == [card, copy_id]
        copy = store.find_layer_by_id(copy_id)
        assert copy.children[0].text == "Hello"
        assert store.validate() == []

    @pytest.mark.unit
    def test_unknown_id(self, store):
        assert store.duplicate_layer("missing") is None


class TestUpdateLayerProps:
    """Payload updates."""

    @pytest.mark.unit
    def test_merges_props(self, store):
        button = store.add_component_layer("Button")
        store.update_layer_props(button, {"variant": "ghost"})
        store.update_layer_props(button, {"size": "sm"})
        assert store.find_layer_by_id(button).props == {
            "variant": "ghost",
            "size": "sm",
        }

    @pytest.mark.unit
    def test_text_update(self, store):
        text = store.add_text_layer("a")
        store.update_layer_props(text, {"text": "b", "textType": "markdown"})
        layer = store.find_layer_by_id(text)
        assert (layer.text, layer.text_type) == ("b", "markdown")

    @pytest.mark.unit
    def test_none_text_keeps_tree_printable(self, store):
        text = store.add_text_layer("a")
        store.update_layer_props(text, {"text": None})
        assert store.find_layer_by_id(text).text == "a"
        assert store.format() == f'"a" [text, {text}]'

    @pytest.mark.unit
    def test_non_string_text_rejected(self, store):
        text = store.add_text_layer("a")
        before = store.layers
        with pytest.raises(ValueError):
            store.update_layer_props(text, {"text": 5})
        assert store.layers is before

    @pytest.mark.unit
    def test_props_not_editable_in_place(self, store):
        card = store.add_component_layer("Card")
        store.update_layer_props(card, {"title": "Home"})
        before = store.layers
        with pytest.raises(TypeError):
            store.find_layer_by_id(card).props["title"] = "changed"
        assert before[0].props["title"] == "Home"

    @pytest.mark.unit
    def test_keeps_selection(self, store):
        button = store.add_component_layer("Button")
        store.select_layer(button)
        store.update_layer_props(button, {"size": "lg"})
        assert store.selected_layer_id == button


class TestSelection:
    """Selecting layers."""

    @pytest.mark.unit
    def test_select_existing(self, store):
        card = store.add_component_layer("Card")
        store.select_layer(card)
        assert store.selected_layer.id == card

    @pytest.mark.unit
    def test_select_missing_is_noop(self, store):
        card = store.add_component_layer("Card")
        store.select_layer(card)
        store.select_layer("missing")
        assert store.selected_layer_id == card

    @pytest.mark.unit
    def test_select_none_clears(self, store):
        card = store.add_component_layer("Card")
        store.select_layer(card)
        store.select_layer(None)
        assert store.selected_layer_id is None

    @pytest.mark.unit
    def test_reorder_dropping_selected_clears(self, store):
        card = store.add_component_layer("Card")
        a = store.add_component_layer("Button", parent_id=card)
        b = store.add_component_layer("Badge", parent_id=card)
        store.select_layer(a)
        store.reorder_children_layers(card, [b])
        assert store.selected_layer_id is None


class TestReorderChildrenLayers:
    """Reordering through the store."""

    @pytest.mark.unit
    def test_permutation(self, store):
        card = store.add_component_layer("Card")
        ids = [store.add_component_layer("Button", parent_id=card) for _ in range(3)]
        store.reorder_children_layers(card, list(reversed(ids)))
        assert [c.id for c in store.layers[0].children] == list(reversed(ids))

    @pytest.mark.unit
    def test_strict_rejects_partial_list(self, registry):
        store = LayerStore(registry, strict=True)
        card = store.add_component_layer("Card")
        a = store.add_component_layer("Button", parent_id=card)
        store.add_component_layer("Button", parent_id=card)
        with pytest.raises(ValidationError):
            store.reorder_children_layers(card, [a])


class TestInspection:
    """validate() and format()."""

    @pytest.mark.unit
    def test_format_marks_selection(self, store):
        card = store.add_component_layer("Card")
        text = store.add_text_layer("Hello", parent_id=card)
        store.select_layer(text)
        lines = store.format().splitlines()
        assert lines[0].startswith(f"Card [{card}")
        assert lines[1] == f'└── "Hello" [text, {text}] *'

    @pytest.mark.unit
    def test_debug_logging_shows_tree(self, store, caplog):
        with caplog.at_level(logging.DEBUG, logger="src.store.lib"):
            store.add_component_layer("Button")
        assert "Layer tree:" in caplog.text
