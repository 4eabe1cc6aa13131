"""Output formatting for layer tree visualization.

Generates human-readable text representations of layer trees for logs and
review.
"""

from typing import Sequence

from src.layer import ComponentLayer, Layer, TextLayer

_TEXT_PREVIEW_LENGTH = 24


def format_layer_tree(tree: Sequence[Layer], selected_id: str | None = None) -> str:
    """Format a layer tree as a human-readable tree.

    Example output:
        Card [page]
        ├── Button [header, size=sm]
        └── Card [body] *
            └── "Hello" [text, t1]

    Args:
        tree: Root layers.
        selected_id: Layer to mark with ``*``.

    Returns:
        Formatted tree string (empty for an empty tree).
    """
    lines: list[str] = []
    for layer in tree:
        _format_layer(layer, lines, "", is_last=True, is_root=True, selected_id=selected_id)
    return "\n".join(lines)


def _describe(layer: Layer) -> str:
    if isinstance(layer, TextLayer):
        text = layer.text
        if len(text) > _TEXT_PREVIEW_LENGTH:
            text = text[: _TEXT_PREVIEW_LENGTH - 3] + "..."
        return f'"{text}" [{layer.text_type}, {layer.id}]'

    attrs = [layer.id]
    attrs.extend(
        f"{key}={value}"
        for key, value in layer.props.items()
        if isinstance(value, (str, int, float, bool))
    )
    return f"{layer.type} [{', '.join(attrs)}]"


def _format_layer(
    layer: Layer,
    lines: list[str],
    prefix: str,
    is_last: bool,
    is_root: bool = False,
    selected_id: str | None = None,
) -> None:
    """Recursively format a layer and its children."""
    if is_root:
        connector = ""
        child_prefix = ""
    else:
        connector = "└── " if is_last else "├── "
        child_prefix = prefix + ("    " if is_last else "│   ")

    marker = " *" if selected_id is not None and layer.id == selected_id else ""
    lines.append(f"{prefix}{connector}{_describe(layer)}{marker}")

    if isinstance(layer, ComponentLayer):
        for i, child in enumerate(layer.children):
            is_last_child = i == len(layer.children) - 1
            _format_layer(child, lines, child_prefix, is_last_child, selected_id=selected_id)


__all__ = ["format_layer_tree"]
