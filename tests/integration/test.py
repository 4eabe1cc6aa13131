"""Integration tests for editing sessions.

Drive a ``LayerStore`` over the sample registry the way an editor would:
add components, nest text, reorder, duplicate and remove, checking the
tree and selection after each step.
"""

import pytest

from src.layer import ComponentLayer, TextLayer
from src.schema import coerce_props
from src.store import LayerStore


@pytest.mark.integration
def test_add_button_to_empty_tree(store):
    """A fresh Button has a generated id, no children, only required props."""
    button_id = store.add_component_layer("Button")

    assert len(store.layers) == 1
    button = store.layers[0]
    assert isinstance(button, ComponentLayer)
    assert button.type == "Button"
    assert button.id == button_id
    assert len(button_id) == 7
    assert button.children == ()
    assert "variant" not in button.props


@pytest.mark.integration
def test_remove_redirects_selection_to_parent_then_clears(store):
    a = store.add_component_layer("Card")
    b = store.add_component_layer("Badge", parent_id=a)
    store.select_layer(b)

    store.remove_layer(b)
    assert store.selected_layer_id == a

    store.remove_layer(a)
    assert store.selected_layer_id is None
    assert store.layers == ()


@pytest.mark.integration
def test_reorder_drops_omitted_child(store):
    root = store.add_component_layer("Card")
    a = store.add_component_layer("Button", parent_id=root)
    store.add_component_layer("Button", parent_id=root)
    c = store.add_component_layer("Button", parent_id=root)

    store.reorder_children_layers(root, [c, a])

    assert [child.id for child in store.layers[0].children] == [c, a]


@pytest.mark.integration
def test_editing_session(registry):
    """A longer session keeps the tree valid throughout."""
    store = LayerStore(registry, seed=42)

    page = store.add_component_layer("Card")
    store.update_layer_props(page, {"title": "Dashboard"})
    table = store.add_component_layer("Transactions", parent_id=page)
    caption = store.add_text_layer("Recent *activity*", "markdown", parent_id=page)
    store.reorder_children_layers(page, [caption, table])
    store.select_layer(table)

    copy_id = store.duplicate_layer(page)
    assert copy_id is not None
    assert store.validate() == []
    assert store.selected_layer_id == table

    original, copy = store.layers
    assert copy.props == original.props == {"title": "Dashboard"}
    assert [c.type for c in copy.children] == ["_text_", "Transactions"]
    assert {c.id for c in copy.children}.isdisjoint({caption, table})

    store.remove_layer(page)
    assert store.selected_layer_id == copy_id
    assert store.find_layer_by_id(table) is None
    assert [layer.id for layer in store.layers] == [copy_id]

    text = store.layers[0].children[0]
    assert isinstance(text, TextLayer)
    store.update_layer_props(text.id, {"text": ""})
    assert store.find_layer_by_id(text.id).text == ""


@pytest.mark.integration
def test_edited_props_coerce_through_normalized_shape(store, registry):
    """Form input for a derived layer coerces back to canonical values."""
    layer_id = store.add_component_layer("Transactions")
    store.update_layer_props(
        layer_id,
        {"data": [{"id": "1", "customer": "Ada", "email": "a@x.io", "amount": "12.5"}]},
    )

    props = store.find_layer_by_id(layer_id).props
    coerced = coerce_props(
        registry.normalized_shape("Transactions"), props, name="Transactions"
    )

    assert coerced["data"][0]["amount"] == 12.5


@pytest.mark.integration
def test_format_reflects_session(store):
    card = store.add_component_layer("Card")
    store.update_layer_props(card, {"title": "Home"})
    store.add_text_layer("Hello", parent_id=card)
    button = store.add_component_layer("Button", parent_id=card)
    store.update_layer_props(button, {"size": "sm"})

    lines = store.format().splitlines()
    assert lines[0] == f"Card [{card}, title=Home]"
    assert lines[1].startswith('├── "Hello" [text, ')
    assert lines[2] == f"└── Button [{button}, size=sm]"
