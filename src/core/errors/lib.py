"""Exception hierarchy for ui-layer-builder.

Derivation and lookup failures surface synchronously to the caller.
Structural no-ops (missing ids, text parents) are not errors and never
raise unless a caller opts into strict mode.
"""

from typing import Any

__all__ = [
    "UIBuilderError",
    "SchemaDerivationError",
    "UnknownComponentTypeError",
    "ValidationError",
    "PropsValidationError",
]


class UIBuilderError(Exception):
    """Base error for the layer builder."""


class SchemaDerivationError(UIBuilderError):
    """A required field's shape has no default-value strategy.

    Attributes:
        path: Dotted path of the offending field (e.g. ``data[].amount``).
        reason: Human-readable explanation.
    """

    def __init__(self, path: str, reason: str = "unsupported shape"):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot derive a default for '{path}': {reason}")


class UnknownComponentTypeError(UIBuilderError, KeyError):
    """Component type name is absent from the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown component type: {self.name!r}"


class ValidationError(UIBuilderError, ValueError):
    """Strict-mode structural error (invalid parent, bad reorder list)."""


class PropsValidationError(UIBuilderError, ValueError):
    """Props failed coercion against a normalized shape.

    Attributes:
        errors: Error dicts as reported by pydantic.
    """

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Invalid props: {details}")
