"""Tests for the error hierarchy."""

import pytest

from .lib import (
    PropsValidationError,
    SchemaDerivationError,
    UIBuilderError,
    UnknownComponentTypeError,
    ValidationError,
)


class TestErrorHierarchy:
    """All errors share a common base."""

    @pytest.mark.unit
    def test_all_errors_derive_from_base(self):
        for cls in (
            SchemaDerivationError,
            UnknownComponentTypeError,
            ValidationError,
            PropsValidationError,
        ):
            assert issubclass(cls, UIBuilderError)

    @pytest.mark.unit
    def test_unknown_component_is_key_error(self):
        err = UnknownComponentTypeError("Carousel")
        assert isinstance(err, KeyError)
        assert str(err) == "Unknown component type: 'Carousel'"

    @pytest.mark.unit
    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)


class TestSchemaDerivationError:
    """Derivation errors name the offending field path."""

    @pytest.mark.unit
    def test_message_contains_path(self):
        err = SchemaDerivationError("data[].amount", "bare 'any'")
        assert err.path == "data[].amount"
        assert "data[].amount" in str(err)
        assert "bare 'any'" in str(err)


class TestPropsValidationError:
    """Props errors summarize pydantic error locations."""

    @pytest.mark.unit
    def test_message_joins_locations(self):
        err = PropsValidationError(
            [{"loc": ("size",), "msg": "Input should be 'sm' or 'lg'"}]
        )
        assert "size: Input should be 'sm' or 'lg'" in str(err)
        assert err.errors[0]["loc"] == ("size",)
