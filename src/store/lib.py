"""Session state for the layer builder.

``LayerStore`` holds the current layer tree and the selected layer id, and
is the only mutation surface for a session. Every mutation delegates to a
pure operation in ``src.layer`` and swaps in the returned tree.
"""

import logging
from typing import Any, Mapping, Sequence

from src.config import get_id_length, is_strict_mode
from src.core.errors import SchemaDerivationError
from src.layer import (
    ComponentLayer,
    Layer,
    LayerTree,
    TextLayer,
    TextType,
    collect_ids,
    create_id,
    duplicate_with_id,
    find_by_id,
    find_parent_of,
    insert,
    remove,
    reorder_children,
    update_payload,
)
from src.output import format_layer_tree
from src.registry import ComponentRegistry, RegistryEntry
from src.schema import derive
from src.validation import TreeIssue, validate_tree

logger = logging.getLogger(__name__)


class LayerStore:
    """Editable layer tree plus the current selection.

    Example:
        >>> store = LayerStore(registry)
        >>> button_id = store.add_component_layer("Button")
        >>> store.select_layer(button_id)
        >>> store.selected_layer.type
        'Button'

    Args:
        registry: Component catalog used to instantiate layers.
        seed: Seed for default-prop derivation. Defaults to
            UI_BUILDER_DERIVE_SEED.
        strict: Raise on invalid parents and reorder lists instead of
            ignoring them. Defaults to UI_BUILDER_STRICT.
        id_length: Length of generated ids. Defaults to UI_BUILDER_ID_LENGTH.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        *,
        seed: int | None = None,
        strict: bool | None = None,
        id_length: int | None = None,
    ):
        self._registry = registry
        self._seed = seed
        self._strict = is_strict_mode(strict)
        self._id_length = get_id_length(id_length)
        self._layers: LayerTree = ()
        self._selected_layer_id: str | None = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def layers(self) -> LayerTree:
        """Current tree (immutable)."""
        return self._layers

    @property
    def selected_layer_id(self) -> str | None:
        return self._selected_layer_id

    @property
    def selected_layer(self) -> Layer | None:
        return find_by_id(self._layers, self._selected_layer_id)

    @property
    def components(self) -> list[RegistryEntry]:
        """Registered component types available for insertion."""
        return self._registry.entries()

    def reset(self) -> None:
        """Clear the tree and the selection."""
        self._layers = ()
        self._selected_layer_id = None
        logger.debug("Store reset")

    def find_layer_by_id(self, layer_id: str | None) -> Layer | None:
        return find_by_id(self._layers, layer_id)

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_component_layer(
        self,
        type_name: str,
        parent_id: str | None = None,
        position: int | None = None,
    ) -> str | None:
        """Instantiate a registered component and insert it.

        Props are derived from the type's normalized shape; a derived
        ``children`` value is dropped since children live in the tree.

        Returns:
            The new layer id, or None if the parent could not take it.

        Raises:
            UnknownComponentTypeError: If ``type_name`` is not registered.
            SchemaDerivationError: If a required prop has no default.
        """
        shape = self._registry.normalized_shape(type_name)
        try:
            props = derive(shape, seed=self._seed)
        except SchemaDerivationError as e:
            logger.warning("Cannot instantiate '%s': %s", type_name, e)
            raise
        props.pop("children", None)

        layer = ComponentLayer(id=self._new_id(), type=type_name, props=props)
        return self._insert(layer, parent_id, position)

    def add_text_layer(
        self,
        text: str,
        text_type: TextType | str = TextType.TEXT,
        parent_id: str | None = None,
        position: int | None = None,
    ) -> str | None:
        """Insert a text layer.

        Returns:
            The new layer id, or None if the parent could not take it.
        """
        layer = TextLayer(id=self._new_id(), text=text, text_type=TextType(text_type))
        return self._insert(layer, parent_id, position)

    def duplicate_layer(self, layer_id: str) -> str | None:
        """Duplicate a subtree next to the original.

        Returns:
            Id of the copy's root, or None when ``layer_id`` is unknown.
        """
        tree, copy_id = duplicate_with_id(self._layers, layer_id, self._id_length)
        self._commit(tree)
        return copy_id

    def remove_layer(self, layer_id: str) -> None:
        """Remove a subtree and redirect the selection.

        The selection moves to the removed layer's parent, or the first root
        component when the removed layer was a root. With no components left
        the selection is cleared.
        """
        parent = find_parent_of(self._layers, layer_id)
        tree = remove(self._layers, layer_id)
        if tree is self._layers:
            return

        self._layers = tree
        if parent is not None:
            self._selected_layer_id = parent.id
        else:
            first = next(
                (layer for layer in tree if isinstance(layer, ComponentLayer)), None
            )
            self._selected_layer_id = first.id if first is not None else None
        self._log_tree()

    def update_layer_props(self, layer_id: str, props: Mapping[str, Any]) -> None:
        """Merge props into a component layer, or update a text layer.

        Raises:
            ValueError: If a text layer receives an unknown text type.
        """
        self._commit(update_payload(self._layers, layer_id, props))

    def select_layer(self, layer_id: str | None) -> None:
        """Select a layer. Unknown ids leave the selection unchanged."""
        if layer_id is None:
            self._selected_layer_id = None
            return
        if find_by_id(self._layers, layer_id) is None:
            logger.debug("Ignoring selection of unknown layer '%s'", layer_id)
            return
        self._selected_layer_id = layer_id

    def reorder_children_layers(
        self, parent_id: str, ordered_ids: Sequence[str]
    ) -> None:
        """Replace a parent's children with the listed ones, in order.

        Raises:
            ValidationError: In strict mode, for a bad parent or id list.
        """
        self._commit(
            reorder_children(
                self._layers, parent_id, ordered_ids, strict=self._strict
            )
        )

    # =========================================================================
    # Inspection
    # =========================================================================

    def validate(self) -> list[TreeIssue]:
        """Check the current tree for structural issues."""
        return validate_tree(self._layers)

    def format(self) -> str:
        """Render the current tree as text, marking the selection."""
        return format_layer_tree(self._layers, self._selected_layer_id)

    # =========================================================================
    # Internals
    # =========================================================================

    def _new_id(self) -> str:
        return create_id(collect_ids(self._layers), self._id_length)

    def _insert(
        self, layer: Layer, parent_id: str | None, position: int | None
    ) -> str | None:
        tree = insert(self._layers, layer, parent_id, position, strict=self._strict)
        if tree is self._layers:
            return None
        self._commit(tree)
        return layer.id

    def _commit(self, tree: LayerTree) -> None:
        if tree is self._layers:
            return
        self._layers = tree
        if find_by_id(tree, self._selected_layer_id) is None:
            self._selected_layer_id = None
        self._log_tree()

    def _log_tree(self) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Layer tree:\n%s", self.format())


__all__ = ["LayerStore"]
