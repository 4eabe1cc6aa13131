"""Unit tests for the shape model and the normalizer."""

import pytest

from . import (
    CLASS_NAME_FIELD,
    ArrayShape,
    CoerceShape,
    EnumShape,
    NullableShape,
    ObjectShape,
    OptionalShape,
    ShapeKind,
    TupleShape,
    UnionShape,
    array,
    boolean,
    coerce,
    date,
    enum,
    is_nullable,
    is_optional,
    iter_shapes,
    literal,
    normalize,
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


class TestShapeModel:
    """Tests for shape nodes and builders."""

    @pytest.mark.unit
    def test_object_preserves_field_order(self):
        shape = obj(b=string(), a=number(), c=boolean())
        assert shape.names() == ["b", "a", "c"]

    @pytest.mark.unit
    def test_object_lookup(self):
        shape = obj(label=string())
        assert "label" in shape
        assert "missing" not in shape
        assert shape.get("label") == string()
        assert shape.get("missing") is None

    @pytest.mark.unit
    def test_extend_replaces_in_place(self):
        shape = obj(a=string(), b=string()).extend(a=number(), c=boolean())
        assert shape.names() == ["a", "b", "c"]
        assert shape.get("a") == number()

    @pytest.mark.unit
    def test_shapes_are_hashable_and_comparable(self):
        assert obj(a=string()) == obj(a=string())
        assert hash(array(string())) == hash(array(string()))
        assert with_default(array(string()), ["x"]) == with_default(
            array(string()), ["x"]
        )
        hash(with_default(array(string()), ["x"]))

    @pytest.mark.unit
    def test_enum_default_must_be_a_value(self):
        with pytest.raises(ValueError):
            enum("a", "b", default="c")

    @pytest.mark.unit
    def test_only_number_and_date_coerce(self):
        with pytest.raises(ValueError):
            coerce(string())

    @pytest.mark.unit
    def test_kind_tags(self):
        assert string().kind == ShapeKind.PRIMITIVE
        assert obj().kind == ShapeKind.OBJECT
        assert optional(string()).kind == ShapeKind.OPTIONAL


class TestPredicates:
    """Tests for optional/nullable predicates."""

    @pytest.mark.unit
    def test_optional_seen_through_nullable(self):
        assert is_optional(optional(string()))
        assert is_optional(nullable(optional(string())))
        assert is_optional(optional(nullable(string())))
        assert not is_optional(nullable(string()))
        assert not is_optional(with_default(string(), "x"))

    @pytest.mark.unit
    def test_nullable_seen_through_optional(self):
        assert is_nullable(optional(nullable(string())))
        assert not is_nullable(optional(string()))

    @pytest.mark.unit
    def test_unwrap(self):
        assert unwrap(optional(nullable(number()))) == number()

    @pytest.mark.unit
    def test_iter_shapes_is_preorder(self):
        shape = obj(items=array(optional(string())))
        kinds = [s.kind for s in iter_shapes(shape)]
        assert kinds == [
            ShapeKind.OBJECT,
            ShapeKind.ARRAY,
            ShapeKind.OPTIONAL,
            ShapeKind.PRIMITIVE,
        ]


class TestUnionToEnum:
    """String-literal unions collapse into enums."""

    @pytest.mark.unit
    def test_string_literal_union_becomes_enum(self):
        shape = normalize(obj(size=union(literal("sm"), literal("lg"))))
        assert shape.get("size") == EnumShape(("sm", "lg"), default="sm")

    @pytest.mark.unit
    def test_modifiers_preserved(self):
        variant = optional(
            nullable(union(literal("default"), literal("ghost"), literal("link")))
        )
        shape = normalize(obj(variant=variant))
        assert shape.get("variant") == OptionalShape(
            NullableShape(
                EnumShape(("default", "ghost", "link"), default="default")
            )
        )

    @pytest.mark.unit
    def test_mixed_literal_union_untouched(self):
        mixed = union(literal("auto"), literal(12))
        shape = normalize(obj(width=mixed))
        assert shape.get("width") == mixed

    @pytest.mark.unit
    def test_non_literal_union_untouched(self):
        mixed = union(literal("auto"), string())
        shape = normalize(obj(width=mixed))
        assert isinstance(shape.get("width"), UnionShape)

    @pytest.mark.unit
    def test_recurses_into_arrays_and_tuples(self):
        shape = normalize(
            obj(
                tags=array(union(literal("a"), literal("b"))),
                pair=tuple_(union(literal("x"), literal("y")), string()),
            )
        )
        assert shape.get("tags") == ArrayShape(EnumShape(("a", "b"), default="a"))
        pair = shape.get("pair")
        assert isinstance(pair, TupleShape)
        assert pair.items[0] == EnumShape(("x", "y"), default="x")

    @pytest.mark.unit
    def test_recurses_into_nested_objects(self):
        shape = normalize(obj(style=obj(tone=union(literal("warm"), literal("cool")))))
        nested = shape.get("style")
        assert isinstance(nested, ObjectShape)
        assert nested.get("tone") == EnumShape(("warm", "cool"), default="warm")


class TestCoercion:
    """Numbers and dates become optional coercions."""

    @pytest.mark.unit
    def test_required_number_widened_to_optional(self):
        shape = normalize(obj(count=number()))
        assert shape.get("count") == OptionalShape(CoerceShape(number()))

    @pytest.mark.unit
    def test_optional_date_not_double_wrapped(self):
        shape = normalize(obj(due=optional(date())))
        assert shape.get("due") == OptionalShape(CoerceShape(date()))

    @pytest.mark.unit
    def test_nullable_number(self):
        shape = normalize(obj(limit=nullable(number())))
        assert shape.get("limit") == NullableShape(
            OptionalShape(CoerceShape(number()))
        )

    @pytest.mark.unit
    def test_nested_numbers_coerced(self):
        shape = normalize(obj(rows=array(obj(amount=number()))))
        rows = shape.get("rows")
        assert rows.element.get("amount") == OptionalShape(CoerceShape(number()))

    @pytest.mark.unit
    def test_enum_and_strings_untouched(self):
        shape = normalize(obj(label=string(), tone=enum("a", "b")))
        assert shape.get("label") == string()
        assert shape.get("tone") == enum("a", "b")


class TestCommonFields:
    """Every normalized shape gains an optional className."""

    @pytest.mark.unit
    def test_class_name_appended_last(self):
        shape = normalize(obj(label=string(), count=number()))
        assert shape.names()[-1] == CLASS_NAME_FIELD
        assert shape.get(CLASS_NAME_FIELD) == optional(string())

    @pytest.mark.unit
    def test_class_name_not_added_to_children(self):
        shape = normalize(obj(style=obj(color=string())))
        assert CLASS_NAME_FIELD not in shape.get("style")

    @pytest.mark.unit
    def test_empty_shape_gets_class_name(self):
        assert normalize(obj()).names() == [CLASS_NAME_FIELD]


class TestNormalize:
    """End-to-end normalization behavior."""

    @pytest.mark.unit
    def test_idempotent(self):
        shape = obj(
            variant=optional(nullable(union(literal("a"), literal("b")))),
            count=number(),
            due=nullable(date()),
            rows=array(obj(amount=number())),
        )
        once = normalize(shape)
        assert normalize(once) == once

    @pytest.mark.unit
    def test_rejects_non_object(self):
        with pytest.raises(TypeError):
            normalize(string())

    @pytest.mark.unit
    def test_untouched_subtrees_are_shared(self):
        style = obj(color=string())
        shape = normalize(obj(style=style))
        assert shape.get("style") is style
