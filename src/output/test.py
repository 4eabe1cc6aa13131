"""Tests for layer tree formatting."""

import pytest

from src.layer import ComponentLayer, TextLayer, TextType, insert

from .lib import format_layer_tree


@pytest.fixture
def tree():
    return (
        ComponentLayer(
            id="page",
            type="Card",
            children=(
                ComponentLayer(id="header", type="Button", props={"size": "sm"}),
                ComponentLayer(
                    id="body",
                    type="Card",
                    children=(TextLayer(id="t1", text="Hello"),),
                ),
            ),
        ),
    )


class TestFormatLayerTree:
    """Tests for format_layer_tree."""

    @pytest.mark.unit
    def test_box_drawing_layout(self, tree):
        assert format_layer_tree(tree) == "\n".join(
            [
                "Card [page]",
                "├── Button [header, size=sm]",
                "└── Card [body]",
                '    └── "Hello" [text, t1]',
            ]
        )

    @pytest.mark.unit
    def test_selected_marker(self, tree):
        output = format_layer_tree(tree, selected_id="body")
        assert "└── Card [body] *" in output

    @pytest.mark.unit
    def test_empty_tree(self):
        assert format_layer_tree(()) == ""

    @pytest.mark.unit
    def test_long_text_truncated(self):
        layer = TextLayer(id="t", text="x" * 40, text_type=TextType.MARKDOWN)
        output = format_layer_tree((layer,))
        assert output == f'"{"x" * 21}..." [markdown, t]'

    @pytest.mark.unit
    def test_multiple_roots(self):
        tree = (ComponentLayer(id="a", type="Card"), TextLayer(id="b", text="hi"))
        assert format_layer_tree(tree).splitlines() == [
            "Card [a]",
            '"hi" [text, b]',
        ]

    @pytest.mark.unit
    def test_non_scalar_props_omitted(self):
        layer = ComponentLayer(id="a", type="Table", props={"data": [1, 2]})
        assert format_layer_tree((layer,)) == "Table [a]"

    @pytest.mark.unit
    def test_default_text_type_label(self):
        tree = insert((), TextLayer(id="t1", text="Hi"))
        assert format_layer_tree(tree) == '"Hi" [text, t1]'
