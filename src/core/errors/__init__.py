"""Error taxonomy for ui-layer-builder."""

from .lib import (
    PropsValidationError,
    SchemaDerivationError,
    UIBuilderError,
    UnknownComponentTypeError,
    ValidationError,
)

__all__ = [
    "UIBuilderError",
    "SchemaDerivationError",
    "UnknownComponentTypeError",
    "ValidationError",
    "PropsValidationError",
]
