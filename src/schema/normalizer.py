"""Shape normalization for default derivation and runtime coercion.

``normalize`` applies three passes to a component's declared props shape:

1. Unions of string literals collapse into a closed ``EnumShape`` whose
   default is the first literal. Optional/nullable wrappers survive.
2. Generic ``number`` and ``date`` primitives become
   ``optional(coerce(...))``. The optional wrapper is added even for
   required fields, so derivation skips them and free-form edits never
   fail strict validation.
3. A top-level optional ``className`` string is appended.
"""

import logging

from .lib import (
    CoerceShape,
    EnumShape,
    LiteralShape,
    ObjectShape,
    OptionalShape,
    PrimitiveShape,
    PrimitiveType,
    Shape,
    ShapeTransformer,
    UnionShape,
    optional,
    string,
)

logger = logging.getLogger(__name__)

CLASS_NAME_FIELD = "className"

_COERCED_TYPES = (PrimitiveType.NUMBER, PrimitiveType.DATE)


class _UnionToEnum(ShapeTransformer):
    """Collapse homogeneous string-literal unions into enums."""

    def visit_union(self, shape: UnionShape) -> Shape:
        options = shape.options
        if options and all(
            isinstance(option, LiteralShape) and isinstance(option.value, str)
            for option in options
        ):
            values: list[str] = []
            for option in options:
                if option.value not in values:
                    values.append(option.value)
            return EnumShape(tuple(values), default=values[0])
        return self.generic_visit(shape)


class _CoerceNumbersAndDates(ShapeTransformer):
    """Wrap number and date primitives in an optional coercion."""

    def visit_primitive(self, shape: PrimitiveShape) -> Shape:
        if shape.type in _COERCED_TYPES:
            return OptionalShape(CoerceShape(shape))
        return shape

    def visit_optional(self, shape: OptionalShape) -> Shape:
        inner = self.visit(shape.inner)
        # optional(optional(coerce(x))) collapses to a single wrapper
        if isinstance(inner, OptionalShape):
            return inner
        return shape if inner is shape.inner else OptionalShape(inner)

    def visit_coerce(self, shape: CoerceShape) -> Shape:
        return shape

    def visit_enum(self, shape: EnumShape) -> Shape:
        return shape


def _add_common(shape: ObjectShape) -> ObjectShape:
    if CLASS_NAME_FIELD in shape:
        return shape
    return shape.extend(**{CLASS_NAME_FIELD: optional(string())})


def normalize(shape: Shape) -> ObjectShape:
    """Rewrite a props shape into canonical enumeration/coercion form.

    Args:
        shape: Declared props shape. Must be an ``ObjectShape``.

    Returns:
        Normalized object shape. Normalizing it again returns an equal shape.

    Raises:
        TypeError: If ``shape`` is not an object shape.
    """
    if not isinstance(shape, ObjectShape):
        raise TypeError(
            f"Component props must be described by an object shape, "
            f"got '{shape.kind.value}'"
        )

    result = _UnionToEnum().visit(shape)
    result = _CoerceNumbersAndDates().visit(result)
    result = _add_common(result)

    logger.debug("Normalized shape fields: %s", ", ".join(result.names()))
    return result


__all__ = ["CLASS_NAME_FIELD", "normalize"]
