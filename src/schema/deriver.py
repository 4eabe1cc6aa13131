"""Deterministic default-value derivation from props shapes.

``derive`` produces a minimal valid props mapping for a (normalized) object
shape: one example value per required top-level field, optional fields
omitted. All randomness flows from a private ``random.Random(seed)``, so the
same shape and seed always produce identical output.

Example:
    >>> from src.schema import derive, normalize, obj, string
    >>> shape = normalize(obj(label=string()))
    >>> derive(shape, seed=1234) == derive(shape, seed=1234)
    True
"""

import copy
import logging
import random
from datetime import date, timedelta
from typing import Any

from src.config import EnvVar, get_derive_seed, get_environment
from src.core.errors import SchemaDerivationError

from .lib import (
    ArrayShape,
    CoerceShape,
    DefaultShape,
    EnumShape,
    LiteralShape,
    NullableShape,
    ObjectShape,
    OptionalShape,
    PrimitiveShape,
    PrimitiveType,
    Shape,
    ShapeVisitor,
    TupleShape,
    UnionShape,
    is_optional,
)

logger = logging.getLogger(__name__)

_WORDS = (
    "lorem",
    "ipsum",
    "dolor",
    "sit",
    "amet",
    "consectetur",
    "adipiscing",
    "elit",
    "sed",
    "tempor",
    "incididunt",
    "labore",
    "magna",
    "aliqua",
)

_DATE_EPOCH = date(2020, 1, 1)
_DATE_SPAN_DAYS = 3650
_NUMBER_RANGE = (0, 100)


class _Deriver(ShapeVisitor):
    """Example-value generator; one instance per ``derive`` call."""

    def __init__(self, rng: random.Random, max_array_items: int):
        self._rng = rng
        self._max_array_items = max(1, max_array_items)

    def fail(self, path: str, reason: str) -> None:
        raise SchemaDerivationError(path or "<root>", reason)

    def visit_primitive(self, shape: PrimitiveShape, path: str) -> Any:
        if shape.type == PrimitiveType.STRING:
            return self._rng.choice(_WORDS)
        if shape.type == PrimitiveType.NUMBER:
            return self._rng.randint(*_NUMBER_RANGE)
        if shape.type == PrimitiveType.BOOLEAN:
            return self._rng.random() < 0.5
        if shape.type == PrimitiveType.DATE:
            return _DATE_EPOCH + timedelta(days=self._rng.randint(0, _DATE_SPAN_DAYS))
        self.fail(path, f"no example strategy for '{shape.type.value}'")

    def visit_literal(self, shape: LiteralShape, path: str) -> Any:
        return shape.value

    def visit_enum(self, shape: EnumShape, path: str) -> str:
        if shape.default is not None:
            return shape.default
        if not shape.values:
            self.fail(path, "enumeration has no values")
        return self._rng.choice(shape.values)

    def visit_union(self, shape: UnionShape, path: str) -> Any:
        for option in shape.options:
            try:
                return self.visit(option, path)
            except SchemaDerivationError:
                continue
        self.fail(path, "no union option can be derived")

    def visit_object(self, shape: ObjectShape, path: str) -> dict[str, Any]:
        # Nested objects fill optional fields when they can.
        result: dict[str, Any] = {}
        for name, field_shape in shape:
            field_path = f"{path}.{name}" if path else name
            if is_optional(field_shape):
                try:
                    result[name] = self.visit(field_shape, field_path)
                except SchemaDerivationError:
                    logger.debug("Skipping optional field '%s'", field_path)
                continue
            result[name] = self.visit(field_shape, field_path)
        return result

    def visit_array(self, shape: ArrayShape, path: str) -> list[Any]:
        count = self._rng.randint(1, self._max_array_items)
        return [self.visit(shape.element, f"{path}[]") for _ in range(count)]

    def visit_tuple(self, shape: TupleShape, path: str) -> list[Any]:
        return [
            self.visit(item, f"{path}[{index}]")
            for index, item in enumerate(shape.items)
        ]

    def visit_optional(self, shape: OptionalShape, path: str) -> Any:
        return self.visit(shape.inner, path)

    def visit_nullable(self, shape: NullableShape, path: str) -> Any:
        return self.visit(shape.inner, path)

    def visit_default(self, shape: DefaultShape, path: str) -> Any:
        return copy.deepcopy(shape.default)

    def visit_coerce(self, shape: CoerceShape, path: str) -> Any:
        return self.visit(shape.inner, path)


def required_fields(shape: ObjectShape) -> ObjectShape:
    """Restrict an object shape to its required (non-optional) fields."""
    return ObjectShape(tuple((k, v) for k, v in shape if not is_optional(v)))


def derive(
    shape: Shape,
    seed: int | None = None,
    max_array_items: int | None = None,
) -> dict[str, Any]:
    """Derive default props for the required fields of an object shape.

    Args:
        shape: Object shape, usually the output of ``normalize``.
        seed: Random seed. Defaults to UI_BUILDER_DERIVE_SEED.
        max_array_items: Upper bound on example array length.
            Defaults to UI_BUILDER_MAX_ARRAY_ITEMS.

    Returns:
        Mapping with one value per required top-level field.

    Raises:
        TypeError: If ``shape`` is not an object shape.
        SchemaDerivationError: If a required field has no derivation
            strategy. The error names the field path.
    """
    if not isinstance(shape, ObjectShape):
        raise TypeError(f"Expected an object shape, got '{shape.kind.value}'")

    rng = random.Random(get_derive_seed(seed))
    limit = get_environment(EnvVar.UI_BUILDER_MAX_ARRAY_ITEMS, override=max_array_items)
    return _Deriver(rng, limit).visit(required_fields(shape), "")


__all__ = ["derive", "required_fields"]
