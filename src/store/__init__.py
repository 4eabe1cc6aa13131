"""Session store - the single mutation surface for a layer tree.

Example usage:
    >>> from src.store import LayerStore
    >>> store = LayerStore(registry)
    >>> card_id = store.add_component_layer("Card")
    >>> store.add_text_layer("Hello", parent_id=card_id)
"""

from .lib import LayerStore

__all__ = ["LayerStore"]
