"""Centralized environment configuration management for ui-layer-builder.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from src.config import EnvVar, get_environment
    >>>
    >>> seed = get_environment(EnvVar.UI_BUILDER_DERIVE_SEED)  # Returns int
    >>> strict = get_environment(EnvVar.UI_BUILDER_STRICT, override=True)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "UI_BUILDER_ID_LENGTH").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by ui-layer-builder.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - layer: Layer identity settings
        - schema: Default value derivation
        - store: Session store behavior
        - logging: Log output
    """

    # -------------------------------------------------------------------------
    # Layer Identity
    # -------------------------------------------------------------------------
    UI_BUILDER_ID_LENGTH = EnvConfig(
        name="UI_BUILDER_ID_LENGTH",
        default=7,
        var_type=int,
        description="Length of generated alphanumeric layer ids",
        category="layer",
    )

    # -------------------------------------------------------------------------
    # Default Value Derivation
    # -------------------------------------------------------------------------
    UI_BUILDER_DERIVE_SEED = EnvConfig(
        name="UI_BUILDER_DERIVE_SEED",
        default=1234,
        var_type=int,
        description="Seed for deterministic default prop generation",
        category="schema",
    )
    UI_BUILDER_MAX_ARRAY_ITEMS = EnvConfig(
        name="UI_BUILDER_MAX_ARRAY_ITEMS",
        default=3,
        var_type=int,
        description="Upper bound on generated example array length",
        category="schema",
    )

    # -------------------------------------------------------------------------
    # Store Behavior
    # -------------------------------------------------------------------------
    UI_BUILDER_STRICT = EnvConfig(
        name="UI_BUILDER_STRICT",
        default=False,
        var_type=bool,
        description="Raise ValidationError instead of silent structural no-ops",
        category="store",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    UI_BUILDER_LOG_LEVEL = EnvConfig(
        name="UI_BUILDER_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ...)",
        category="logging",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, or bool).

    Example:
        >>> get_environment(EnvVar.UI_BUILDER_ID_LENGTH)
        7
        >>> get_environment(EnvVar.UI_BUILDER_ID_LENGTH, override=12)
        12
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_id_length(override: int | None = None) -> int:
    """Get generated id length, never below 1."""
    return max(1, get_environment(EnvVar.UI_BUILDER_ID_LENGTH, override=override))


def get_derive_seed(override: int | None = None) -> int:
    """Get the default-value derivation seed."""
    return get_environment(EnvVar.UI_BUILDER_DERIVE_SEED, override=override)


def is_strict_mode(override: bool | None = None) -> bool:
    """Whether structural no-ops should raise instead."""
    return bool(get_environment(EnvVar.UI_BUILDER_STRICT, override=override))


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (layer, schema, store, logging).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


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
