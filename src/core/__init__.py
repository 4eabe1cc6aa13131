"""Core utilities shared by every ui-layer-builder module."""

from .errors import (
    PropsValidationError,
    SchemaDerivationError,
    UIBuilderError,
    UnknownComponentTypeError,
    ValidationError,
)
from .log import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Errors
    "UIBuilderError",
    "SchemaDerivationError",
    "UnknownComponentTypeError",
    "ValidationError",
    "PropsValidationError",
]
