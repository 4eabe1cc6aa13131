"""Tests for the component registry."""

import pytest

from src.core.errors import UnknownComponentTypeError
from src.schema import CLASS_NAME_FIELD, EnumShape, normalize, obj, string

from .lib import ComponentRegistry, RegistryEntry


class TestRegistryLookup:
    """Tests for registration and lookup."""

    @pytest.mark.unit
    def test_get_registered_entry(self, registry):
        entry = registry.get("Button")
        assert entry.name == "Button"
        assert callable(entry.component)

    @pytest.mark.unit
    def test_unknown_type_fails_fast(self, registry):
        with pytest.raises(UnknownComponentTypeError) as exc_info:
            registry.get("Carousel")
        assert exc_info.value.name == "Carousel"

    @pytest.mark.unit
    def test_names_in_registration_order(self, registry):
        assert registry.names() == ["Button", "Badge", "Transactions", "Card"]

    @pytest.mark.unit
    def test_container_protocol(self, registry):
        assert "Badge" in registry
        assert "Nope" not in registry
        assert len(registry) == 4
        assert [e.name for e in registry] == registry.names()

    @pytest.mark.unit
    def test_rejects_non_object_shape(self):
        with pytest.raises(TypeError):
            ComponentRegistry([RegistryEntry("Bad", None, string())])

    @pytest.mark.unit
    def test_to_dict(self, registry):
        summary = registry.get("Badge").to_dict()
        assert summary["name"] == "Badge"
        assert summary["fields"] == ["children", "variant"]


class TestNormalizedShape:
    """Normalized shapes are derived lazily and cached."""

    @pytest.mark.unit
    def test_normalizes_declared_shape(self, registry):
        shape = registry.normalized_shape("Button")
        assert CLASS_NAME_FIELD in shape
        assert isinstance(shape.get("variant").inner.inner, EnumShape)

    @pytest.mark.unit
    def test_cached(self, registry):
        assert registry.normalized_shape("Badge") is registry.normalized_shape(
            "Badge"
        )

    @pytest.mark.unit
    def test_pre_normalized_used_as_is(self):
        shape = normalize(obj(label=string()))
        registry = ComponentRegistry(
            [RegistryEntry("Label", None, shape, normalized=True)]
        )
        assert registry.normalized_shape("Label") is shape

    @pytest.mark.unit
    def test_register_replaces_and_clears_cache(self, registry):
        before = registry.normalized_shape("Badge")
        registry.register(RegistryEntry("Badge", None, obj(text=string())))
        after = registry.normalized_shape("Badge")
        assert after is not before
        assert "text" in after

    @pytest.mark.unit
    def test_unknown_type_normalized_shape(self, registry):
        with pytest.raises(UnknownComponentTypeError):
            registry.normalized_shape("Carousel")
