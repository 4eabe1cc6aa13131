"""ui-layer-builder: editable tree of schema-described UI component layers."""

from src.core.errors import (
    PropsValidationError,
    SchemaDerivationError,
    UIBuilderError,
    UnknownComponentTypeError,
    ValidationError,
)
from src.layer import ComponentLayer, Layer, LayerTree, TextLayer, TextType
from src.registry import ComponentRegistry, RegistryEntry
from src.schema import coerce_props, derive, normalize
from src.store import LayerStore
from src.validation import is_valid_tree, validate_tree

__all__ = [
    # Layers
    "ComponentLayer",
    "TextLayer",
    "TextType",
    "Layer",
    "LayerTree",
    # Schema
    "normalize",
    "derive",
    "coerce_props",
    # Registry
    "ComponentRegistry",
    "RegistryEntry",
    # Store
    "LayerStore",
    # Validation
    "validate_tree",
    "is_valid_tree",
    # Errors
    "UIBuilderError",
    "SchemaDerivationError",
    "UnknownComponentTypeError",
    "ValidationError",
    "PropsValidationError",
]
