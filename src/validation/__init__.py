"""Layer tree validation utilities."""

from src.validation.lib import TreeIssue, is_valid_tree, validate_tree

__all__ = [
    "TreeIssue",
    "validate_tree",
    "is_valid_tree",
]
