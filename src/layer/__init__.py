"""Layer module - the editable tree of component and text layers.

This module provides:
- Frozen layer models (ComponentLayer, TextLayer)
- Collision-checked id generation
- Pure copy-on-write tree operations (find, insert, remove, duplicate,
  update, reorder)

Example usage:
    >>> from src.layer import ComponentLayer, TextLayer, insert, remove
    >>> tree = insert((), ComponentLayer(id="card", type="Card"))
    >>> tree = insert(tree, TextLayer(id="t1", text="Hello"), parent_id="card")
    >>> remove(tree, "card")
    ()
"""

from .ids import ALPHABET, create_id
from .lib import (
    IndexPath,
    clone_with_new_ids,
    collect_ids,
    duplicate,
    duplicate_with_id,
    find_by_id,
    find_parent_of,
    find_path,
    insert,
    iter_layers,
    layer_at,
    remove,
    reorder_children,
    update_payload,
)
from .models import (
    TEXT_LAYER_TYPE,
    ComponentLayer,
    Layer,
    LayerTree,
    TextLayer,
    TextType,
    freeze_props,
    is_text_layer,
)

__all__ = [
    # Models
    "TEXT_LAYER_TYPE",
    "TextType",
    "ComponentLayer",
    "TextLayer",
    "Layer",
    "LayerTree",
    "is_text_layer",
    "freeze_props",
    # Ids
    "ALPHABET",
    "create_id",
    # Queries
    "IndexPath",
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
