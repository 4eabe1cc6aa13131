"""Text rendering of layer trees for logs and review."""

from .lib import format_layer_tree

__all__ = ["format_layer_tree"]
