"""Centralized configuration management for ui-layer-builder.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from src.config import EnvVar, get_environment
    >>>
    >>> length = get_environment(EnvVar.UI_BUILDER_ID_LENGTH)  # Returns int: 7
    >>> seed = get_environment(EnvVar.UI_BUILDER_DERIVE_SEED, override=42)

Environment Variable Categories:
    layer: Layer identity settings
    schema: Default value derivation settings
    store: Session store behavior
    logging: Log output configuration
"""

from .lib import (
    EnvConfig,
    EnvVar,
    get_derive_seed,
    get_environment,
    get_environment_info,
    get_id_length,
    is_strict_mode,
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_id_length",
    "get_derive_seed",
    "is_strict_mode",
    # Introspection
    "list_environment_variables",
]
