"""Shape description model for component props.

A shape description is a tree of frozen shape nodes drawn from a closed set
of kinds. Component catalogs declare their configurable props as an
``ObjectShape``; the normalizer, deriver and coercion layers each walk that
tree with a single recursive-descent visitor dispatched on ``shape.kind``.

Example:
    >>> from src.schema import obj, string, union, literal, optional
    >>> button = obj(
    ...     label=string(),
    ...     variant=optional(union(literal("default"), literal("ghost"))),
    ... )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator


class ShapeKind(str, Enum):
    """Closed set of shape-node kinds."""

    PRIMITIVE = "primitive"
    LITERAL = "literal"
    ENUM = "enum"
    UNION = "union"
    OBJECT = "object"
    ARRAY = "array"
    TUPLE = "tuple"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    DEFAULT = "default"
    COERCE = "coerce"


class PrimitiveType(str, Enum):
    """Scalar value types a primitive shape can describe."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ANY = "any"


# =============================================================================
# Shape Nodes
# =============================================================================


@dataclass(frozen=True)
class Shape:
    """Base class for all shape nodes."""

    kind: ClassVar[ShapeKind]


@dataclass(frozen=True)
class PrimitiveShape(Shape):
    """A scalar value of a primitive type."""

    kind: ClassVar[ShapeKind] = ShapeKind.PRIMITIVE

    type: PrimitiveType


@dataclass(frozen=True)
class LiteralShape(Shape):
    """A single constant value."""

    kind: ClassVar[ShapeKind] = ShapeKind.LITERAL

    value: str | int | float | bool


@dataclass(frozen=True)
class EnumShape(Shape):
    """Closed enumeration of string values with an optional default."""

    kind: ClassVar[ShapeKind] = ShapeKind.ENUM

    values: tuple[str, ...]
    default: str | None = None

    def __post_init__(self) -> None:
        if self.default is not None and self.default not in self.values:
            raise ValueError(
                f"Enum default {self.default!r} not among values {self.values}"
            )


@dataclass(frozen=True)
class UnionShape(Shape):
    """Value matching any of several shapes."""

    kind: ClassVar[ShapeKind] = ShapeKind.UNION

    options: tuple[Shape, ...]


@dataclass(frozen=True)
class ObjectShape(Shape):
    """Ordered mapping of field names to shapes."""

    kind: ClassVar[ShapeKind] = ShapeKind.OBJECT

    fields: tuple[tuple[str, Shape], ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[tuple[str, Shape]]:
        return iter(self.fields)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, name: str) -> Shape | None:
        """Look up a field shape by name."""
        for key, value in self.fields:
            if key == name:
                return value
        return None

    def names(self) -> list[str]:
        """Field names in declaration order."""
        return [key for key, _ in self.fields]

    def extend(self, **extra: Shape) -> ObjectShape:
        """Return a copy with fields added (or replaced in place)."""
        merged = dict(self.fields)
        merged.update(extra)
        return ObjectShape(tuple(merged.items()))

    def pick(self, names: list[str]) -> ObjectShape:
        """Return a copy restricted to the given field names."""
        wanted = set(names)
        return ObjectShape(tuple((k, v) for k, v in self.fields if k in wanted))


@dataclass(frozen=True)
class ArrayShape(Shape):
    """Homogeneous sequence of elements."""

    kind: ClassVar[ShapeKind] = ShapeKind.ARRAY

    element: Shape


@dataclass(frozen=True)
class TupleShape(Shape):
    """Fixed-length sequence with per-position shapes."""

    kind: ClassVar[ShapeKind] = ShapeKind.TUPLE

    items: tuple[Shape, ...]


@dataclass(frozen=True)
class OptionalShape(Shape):
    """Value may be absent."""

    kind: ClassVar[ShapeKind] = ShapeKind.OPTIONAL

    inner: Shape


@dataclass(frozen=True)
class NullableShape(Shape):
    """Value may be null."""

    kind: ClassVar[ShapeKind] = ShapeKind.NULLABLE

    inner: Shape


@dataclass(frozen=True, eq=False)
class DefaultShape(Shape):
    """Inner shape with a value used when input is absent."""

    kind: ClassVar[ShapeKind] = ShapeKind.DEFAULT

    inner: Shape
    default: Any = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefaultShape):
            return NotImplemented
        return self.inner == other.inner and self.default == other.default

    def __hash__(self) -> int:
        return hash((self.kind, self.inner, repr(self.default)))


@dataclass(frozen=True)
class CoerceShape(Shape):
    """Loosely-typed input converted to the inner primitive's canonical form."""

    kind: ClassVar[ShapeKind] = ShapeKind.COERCE

    inner: PrimitiveShape


# =============================================================================
# Builders
# =============================================================================


def string() -> PrimitiveShape:
    return PrimitiveShape(PrimitiveType.STRING)


def number() -> PrimitiveShape:
    return PrimitiveShape(PrimitiveType.NUMBER)


def boolean() -> PrimitiveShape:
    return PrimitiveShape(PrimitiveType.BOOLEAN)


def date() -> PrimitiveShape:
    return PrimitiveShape(PrimitiveType.DATE)


def any_() -> PrimitiveShape:
    return PrimitiveShape(PrimitiveType.ANY)


def literal(value: str | int | float | bool) -> LiteralShape:
    return LiteralShape(value)


def enum(*values: str, default: str | None = None) -> EnumShape:
    return EnumShape(tuple(values), default)


def union(*options: Shape) -> UnionShape:
    return UnionShape(tuple(options))


def obj(**fields: Shape) -> ObjectShape:
    """Build an object shape; keyword order is field order."""
    return ObjectShape(tuple(fields.items()))


def array(element: Shape) -> ArrayShape:
    return ArrayShape(element)


def tuple_(*items: Shape) -> TupleShape:
    return TupleShape(tuple(items))


def optional(inner: Shape) -> OptionalShape:
    return OptionalShape(inner)


def nullable(inner: Shape) -> NullableShape:
    return NullableShape(inner)


def with_default(inner: Shape, default: Any) -> DefaultShape:
    return DefaultShape(inner, default)


def coerce(inner: PrimitiveShape) -> CoerceShape:
    if inner.type not in (PrimitiveType.NUMBER, PrimitiveType.DATE):
        raise ValueError(f"Only number and date shapes coerce, got {inner.type}")
    return CoerceShape(inner)


# =============================================================================
# Predicates
# =============================================================================


def is_optional(shape: Shape) -> bool:
    """True when the value may be absent.

    Optionality is visible through nullable wrappers, so
    ``nullable(optional(x))`` and ``optional(nullable(x))`` both count.
    """
    while True:
        if isinstance(shape, OptionalShape):
            return True
        if isinstance(shape, NullableShape):
            shape = shape.inner
            continue
        return False


def is_nullable(shape: Shape) -> bool:
    """True when the value may be null."""
    while True:
        if isinstance(shape, NullableShape):
            return True
        if isinstance(shape, OptionalShape):
            shape = shape.inner
            continue
        return False


def unwrap(shape: Shape) -> Shape:
    """Strip optional and nullable modifiers."""
    while isinstance(shape, (OptionalShape, NullableShape)):
        shape = shape.inner
    return shape


# =============================================================================
# Traversal
# =============================================================================


class ShapeVisitor:
    """Recursive-descent visitor dispatched on ``shape.kind``.

    Subclasses implement ``visit_<kind>`` methods; kinds without a method
    fall through to ``generic_visit``.
    """

    def visit(self, shape: Shape, *args: Any, **kwargs: Any) -> Any:
        method = getattr(self, f"visit_{shape.kind.value}", self.generic_visit)
        return method(shape, *args, **kwargs)

    def generic_visit(self, shape: Shape, *args: Any, **kwargs: Any) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} does not handle shape kind '{shape.kind.value}'"
        )


class ShapeTransformer(ShapeVisitor):
    """Visitor that rebuilds the shape tree.

    ``generic_visit`` visits every child shape and rebuilds the node only if
    a child changed, so untouched subtrees are shared.
    """

    def generic_visit(self, shape: Shape, *args: Any, **kwargs: Any) -> Shape:
        if isinstance(shape, ObjectShape):
            fields = tuple((k, self.visit(v)) for k, v in shape.fields)
            if all(a[1] is b[1] for a, b in zip(fields, shape.fields)):
                return shape
            return ObjectShape(fields)
        if isinstance(shape, ArrayShape):
            element = self.visit(shape.element)
            return shape if element is shape.element else ArrayShape(element)
        if isinstance(shape, TupleShape):
            items = tuple(self.visit(item) for item in shape.items)
            if all(a is b for a, b in zip(items, shape.items)):
                return shape
            return TupleShape(items)
        if isinstance(shape, UnionShape):
            options = tuple(self.visit(option) for option in shape.options)
            if all(a is b for a, b in zip(options, shape.options)):
                return shape
            return UnionShape(options)
        if isinstance(shape, OptionalShape):
            inner = self.visit(shape.inner)
            return shape if inner is shape.inner else OptionalShape(inner)
        if isinstance(shape, NullableShape):
            inner = self.visit(shape.inner)
            return shape if inner is shape.inner else NullableShape(inner)
        if isinstance(shape, DefaultShape):
            inner = self.visit(shape.inner)
            return shape if inner is shape.inner else DefaultShape(inner, shape.default)
        # primitive, literal, enum, coerce are leaves
        return shape


def iter_shapes(shape: Shape) -> Iterator[Shape]:
    """Pre-order walk over a shape and all nested shapes."""
    yield shape
    if isinstance(shape, ObjectShape):
        for _, child in shape.fields:
            yield from iter_shapes(child)
    elif isinstance(shape, ArrayShape):
        yield from iter_shapes(shape.element)
    elif isinstance(shape, TupleShape):
        for item in shape.items:
            yield from iter_shapes(item)
    elif isinstance(shape, UnionShape):
        for option in shape.options:
            yield from iter_shapes(option)
    elif isinstance(shape, (OptionalShape, NullableShape, DefaultShape, CoerceShape)):
        yield from iter_shapes(shape.inner)


__all__ = [
    # Kinds
    "ShapeKind",
    "PrimitiveType",
    # Nodes
    "Shape",
    "PrimitiveShape",
    "LiteralShape",
    "EnumShape",
    "UnionShape",
    "ObjectShape",
    "ArrayShape",
    "TupleShape",
    "OptionalShape",
    "NullableShape",
    "DefaultShape",
    "CoerceShape",
    # Builders
    "string",
    "number",
    "boolean",
    "date",
    "any_",
    "literal",
    "enum",
    "union",
    "obj",
    "array",
    "tuple_",
    "optional",
    "nullable",
    "with_default",
    "coerce",
    # Predicates
    "is_optional",
    "is_nullable",
    "unwrap",
    # Traversal
    "ShapeVisitor",
    "ShapeTransformer",
    "iter_shapes",
]
