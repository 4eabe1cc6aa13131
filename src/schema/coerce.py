"""Runtime coercion of props through a normalized shape.

A normalized shape is compiled into a pydantic model so loosely-typed
editor input (numeric strings, ISO dates) can be converted into canonical
values. Plain ``number``/``date`` primitives that were not normalized stay
strict; ``coerce`` shapes run in pydantic's lax mode.
"""

import copy
import datetime
from typing import Annotated, Any, Literal, Mapping, Optional, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, Strict, create_model

from src.core.errors import PropsValidationError

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
    ShapeVisitor,
    TupleShape,
    UnionShape,
    is_optional,
)

_STRICT_PRIMITIVES: dict[PrimitiveType, Any] = {
    PrimitiveType.STRING: Annotated[str, Strict()],
    PrimitiveType.NUMBER: Annotated[float, Strict()],
    PrimitiveType.BOOLEAN: Annotated[bool, Strict()],
    PrimitiveType.DATE: Annotated[datetime.date, Strict()],
    PrimitiveType.ANY: Any,
}

_LAX_PRIMITIVES: dict[PrimitiveType, Any] = {
    PrimitiveType.NUMBER: float,
    PrimitiveType.DATE: datetime.date,
}


class _AnnotationBuilder(ShapeVisitor):
    """Translate shape nodes into pydantic type annotations."""

    def __init__(self, model_name: str):
        self._model_name = model_name

    def visit_primitive(self, shape: PrimitiveShape, name: str) -> Any:
        return _STRICT_PRIMITIVES[shape.type]

    def visit_coerce(self, shape: CoerceShape, name: str) -> Any:
        return _LAX_PRIMITIVES[shape.inner.type]

    def visit_literal(self, shape: LiteralShape, name: str) -> Any:
        return Literal[shape.value]

    def visit_enum(self, shape: EnumShape, name: str) -> Any:
        return Literal[shape.values]

    def visit_union(self, shape: UnionShape, name: str) -> Any:
        options = tuple(self.visit(option, name) for option in shape.options)
        return Union[options] if len(options) > 1 else options[0]

    def visit_object(self, shape: ObjectShape, name: str) -> type[BaseModel]:
        return _build_model(f"{self._model_name}_{name}", shape)

    def visit_array(self, shape: ArrayShape, name: str) -> Any:
        return list[self.visit(shape.element, name)]

    def visit_tuple(self, shape: TupleShape, name: str) -> Any:
        items = tuple(self.visit(item, name) for item in shape.items)
        return tuple[items] if items else tuple[()]

    def visit_optional(self, shape: OptionalShape, name: str) -> Any:
        return Optional[self.visit(shape.inner, name)]

    def visit_nullable(self, shape: NullableShape, name: str) -> Any:
        return Optional[self.visit(shape.inner, name)]

    def visit_default(self, shape: DefaultShape, name: str) -> Any:
        return self.visit(shape.inner, name)


def _field_default(shape: Any) -> Any:
    if is_optional(shape):
        return None
    if isinstance(shape, DefaultShape):
        return Field(default_factory=lambda: copy.deepcopy(shape.default))
    if isinstance(shape, EnumShape) and shape.default is not None:
        return shape.default
    return ...


def _build_model(model_name: str, shape: ObjectShape) -> type[BaseModel]:
    builder = _AnnotationBuilder(model_name)
    definitions: dict[str, Any] = {
        name: (builder.visit(field_shape, name), _field_default(field_shape))
        for name, field_shape in shape
    }
    return create_model(
        model_name,
        __config__=ConfigDict(extra="allow"),
        **definitions,
    )


def build_props_model(name: str, shape: ObjectShape) -> type[BaseModel]:
    """Compile a normalized object shape into a pydantic model class.

    Args:
        name: Model name, usually the component type.
        shape: Normalized object shape.

    Returns:
        Pydantic model accepting the shape's props. Unknown keys are kept.
    """
    if not isinstance(shape, ObjectShape):
        raise TypeError(f"Expected an object shape, got '{shape.kind.value}'")
    return _build_model(f"{name}Props", shape)


def coerce_props(
    shape: ObjectShape, props: Mapping[str, Any], name: str = "Component"
) -> dict[str, Any]:
    """Validate and coerce props against a normalized shape.

    Only keys present in ``props`` appear in the result; no defaults are
    filled in.

    Args:
        shape: Normalized object shape.
        props: Loosely-typed props (e.g. strings from a form).
        name: Component name used for the generated model.

    Returns:
        Props with canonical values.

    Raises:
        PropsValidationError: If props do not match the shape.
    """
    model = build_props_model(name, shape)
    try:
        instance = model.model_validate(dict(props))
    except pydantic.ValidationError as e:
        raise PropsValidationError(e.errors()) from e
    return instance.model_dump(exclude_unset=True)


__all__ = ["build_props_model", "coerce_props"]
