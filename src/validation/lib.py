"""Layer tree validation and static analysis.

This module detects structural issues in a layer tree: duplicate ids,
nodes shared between two parents, and component props that carry
``children``.
"""

from dataclasses import dataclass
from typing import Sequence

from src.layer import ComponentLayer, Layer


@dataclass
class TreeIssue:
    """Represents a structural issue in a layer tree.

    Attributes:
        layer_id: ID of the layer with the issue.
        message: Human-readable description.
        error_type: Category of the issue.
    """

    layer_id: str
    message: str
    error_type: str


def validate_tree(tree: Sequence[Layer]) -> list[TreeIssue]:
    """Validate a layer tree for structural issues.

    Performs the following checks:
        - Unique ID enforcement (no duplicate IDs)
        - Shared nodes (the same layer object under two parents)
        - ``children`` stored as a prop instead of structurally

    Args:
        tree: Root layers of the tree.

    Returns:
        list[TreeIssue]: Issues found (empty if valid).

    Example:
        >>> issues = validate_tree(store.layers)
        >>> for issue in issues:
        ...     print(f"{issue.layer_id}: {issue.message}")
    """
    issues: list[TreeIssue] = []

    id_counts: dict[str, int] = {}
    _collect_ids(tree, id_counts)
    for layer_id, count in id_counts.items():
        if count > 1:
            issues.append(
                TreeIssue(
                    layer_id=layer_id,
                    message=f"Duplicate ID '{layer_id}' appears {count} times",
                    error_type="duplicate_id",
                )
            )

    issues.extend(_detect_shared_nodes(tree))
    issues.extend(_detect_children_props(tree))
    return issues


def is_valid_tree(tree: Sequence[Layer]) -> bool:
    """Check if a layer tree has no structural issues."""
    return not validate_tree(tree)


def _collect_ids(layers: Sequence[Layer], id_counts: dict[str, int]) -> None:
    for layer in layers:
        id_counts[layer.id] = id_counts.get(layer.id, 0) + 1
        if isinstance(layer, ComponentLayer):
            _collect_ids(layer.children, id_counts)


def _detect_shared_nodes(tree: Sequence[Layer]) -> list[TreeIssue]:
    """Find layer objects reachable through more than one parent.

    Copy-on-write edits never alias nodes, but hand-built trees can.
    """
    issues: list[TreeIssue] = []
    seen: set[int] = set()

    def _check(layers: Sequence[Layer]) -> None:
        for layer in layers:
            obj_id = id(layer)
            if obj_id in seen:
                issues.append(
                    TreeIssue(
                        layer_id=layer.id,
                        message=f"Layer '{layer.id}' is shared by several parents",
                        error_type="shared_node",
                    )
                )
                continue
            seen.add(obj_id)
            if isinstance(layer, ComponentLayer):
                _check(layer.children)

    _check(tree)
    return issues


def _detect_children_props(tree: Sequence[Layer]) -> list[TreeIssue]:
    issues: list[TreeIssue] = []

    def _check(layers: Sequence[Layer]) -> None:
        for layer in layers:
            if not isinstance(layer, ComponentLayer):
                continue
            if "children" in layer.props:
                issues.append(
                    TreeIssue(
                        layer_id=layer.id,
                        message=(
                            f"Layer '{layer.id}' stores 'children' as a prop; "
                            f"children belong in the tree"
                        ),
                        error_type="children_prop",
                    )
                )
            _check(layer.children)

    _check(tree)
    return issues


__all__ = ["TreeIssue", "validate_tree", "is_valid_tree"]
