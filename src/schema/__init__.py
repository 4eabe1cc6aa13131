"""Schema module - props shape descriptions and the algorithms over them.

This module provides:
- A closed set of shape-node kinds plus builder functions
- Normalization into canonical enumeration/coercion form
- Deterministic default-value derivation for required fields
- Runtime coercion of props through pydantic

Example usage:
    >>> from src.schema import derive, normalize, obj, optional, string
    >>> shape = normalize(obj(label=string(), tooltip=optional(string())))
    >>> sorted(derive(shape, seed=1234))
    ['label']
"""

from .coerce import build_props_model, coerce_props
from .deriver import derive, required_fields
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
    ShapeKind,
    ShapeTransformer,
    ShapeVisitor,
    TupleShape,
    UnionShape,
    any_,
    array,
    boolean,
    coerce,
    date,
    enum,
    is_nullable,
    is_optional,
    iter_shapes,
    literal,
    nullable,
    number,
    obj,
    optional,
    string,
    tuple_,
    union,
    unwrap,
    with_default,
)
from .normalizer import CLASS_NAME_FIELD, normalize

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
    # Predicates and traversal
    "is_optional",
    "is_nullable",
    "unwrap",
    "iter_shapes",
    "ShapeVisitor",
    "ShapeTransformer",
    # Algorithms
    "CLASS_NAME_FIELD",
    "normalize",
    "derive",
    "required_fields",
    "build_props_model",
    "coerce_props",
]
