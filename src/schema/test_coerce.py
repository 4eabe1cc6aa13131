"""Unit tests for runtime props coercion."""

import datetime

import pytest

from src.core.errors import PropsValidationError

from . import (
    array,
    boolean,
    build_props_model,
    coerce_props,
    date,
    literal,
    normalize,
    number,
    obj,
    optional,
    string,
    union,
)


@pytest.fixture
def form_shape():
    return normalize(
        obj(
            label=string(),
            count=number(),
            due=optional(date()),
            size=union(literal("sm"), literal("lg")),
            rows=optional(array(obj(amount=number()))),
        )
    )


class TestBuildPropsModel:
    """Normalized shapes compile into pydantic models."""

    @pytest.mark.unit
    def test_model_named_after_component(self, form_shape):
        model = build_props_model("Form", form_shape)
        assert model.__name__ == "FormProps"

    @pytest.mark.unit
    def test_enum_default_applied(self, form_shape):
        model = build_props_model("Form", form_shape)
        instance = model.model_validate({"label": "hi"})
        assert instance.size == "sm"
        assert instance.count is None


class TestCoerceProps:
    """Loosely-typed props become canonical values."""

    @pytest.mark.unit
    def test_numeric_string_coerced(self, form_shape):
        result = coerce_props(form_shape, {"label": "x", "count": "3"})
        assert result == {"label": "x", "count": 3.0}

    @pytest.mark.unit
    def test_iso_date_coerced(self, form_shape):
        result = coerce_props(form_shape, {"label": "x", "due": "2024-05-01"})
        assert result["due"] == datetime.date(2024, 5, 1)

    @pytest.mark.unit
    def test_nested_rows_coerced(self, form_shape):
        result = coerce_props(
            form_shape, {"label": "x", "rows": [{"amount": "1.5"}]}
        )
        assert result["rows"] == [{"amount": 1.5}]

    @pytest.mark.unit
    def test_unset_keys_not_filled(self, form_shape):
        assert coerce_props(form_shape, {"label": "x"}) == {"label": "x"}

    @pytest.mark.unit
    def test_unknown_keys_kept(self, form_shape):
        result = coerce_props(form_shape, {"label": "x", "children": "text"})
        assert result["children"] == "text"

    @pytest.mark.unit
    def test_invalid_enum_rejected(self, form_shape):
        with pytest.raises(PropsValidationError) as exc_info:
            coerce_props(form_shape, {"label": "x", "size": "xl"})
        assert exc_info.value.errors[0]["loc"] == ("size",)

    @pytest.mark.unit
    def test_missing_required_rejected(self, form_shape):
        with pytest.raises(PropsValidationError):
            coerce_props(form_shape, {})

    @pytest.mark.unit
    def test_unnormalized_number_is_strict(self):
        with pytest.raises(PropsValidationError):
            coerce_props(obj(count=number()), {"count": "3"})

    @pytest.mark.unit
    def test_strict_boolean(self):
        shape = obj(disabled=boolean())
        assert coerce_props(shape, {"disabled": True}) == {"disabled": True}
        with pytest.raises(PropsValidationError):
            coerce_props(shape, {"disabled": "yes"})
