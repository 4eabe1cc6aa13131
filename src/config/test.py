"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_derive_seed,
    get_environment,
    get_environment_info,
    get_id_length,
    is_strict_mode,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("UI_BUILDER_ID_LENGTH", raising=False)
        assert get_environment(EnvVar.UI_BUILDER_ID_LENGTH) == 7

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("UI_BUILDER_DERIVE_SEED", "99")
        assert get_environment(EnvVar.UI_BUILDER_DERIVE_SEED, override=5) == 5

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("UI_BUILDER_DERIVE_SEED", "4321")
        result = get_environment(EnvVar.UI_BUILDER_DERIVE_SEED)
        assert result == 4321
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("UI_BUILDER_STRICT", value)
            assert get_environment(EnvVar.UI_BUILDER_STRICT) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("UI_BUILDER_STRICT", value)
            assert get_environment(EnvVar.UI_BUILDER_STRICT) is False

    @pytest.mark.unit
    def test_unrecognized_bool_returns_default(self, monkeypatch):
        """Unrecognized boolean text falls back to the default."""
        monkeypatch.setenv("UI_BUILDER_STRICT", "maybe")
        assert get_environment(EnvVar.UI_BUILDER_STRICT) is False

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("UI_BUILDER_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.UI_BUILDER_LOG_LEVEL) == "DEBUG"

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("UI_BUILDER_MAX_ARRAY_ITEMS", "lots")
        assert get_environment(EnvVar.UI_BUILDER_MAX_ARRAY_ITEMS) == 3


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.UI_BUILDER_ID_LENGTH)
        assert isinstance(info, EnvConfig)
        assert info.name == "UI_BUILDER_ID_LENGTH"
        assert info.default == 7
        assert info.var_type is int
        assert info.category == "layer"

    @pytest.mark.unit
    def test_every_variable_is_described(self):
        """Every variable carries a description."""
        for var in EnvVar:
            assert get_environment_info(var).description


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        """Returns all EnvVar members when no category."""
        result = list_environment_variables()
        assert len(result) == len(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filters by category correctly."""
        schema_vars = list_environment_variables("schema")
        assert EnvVar.UI_BUILDER_DERIVE_SEED in schema_vars
        assert EnvVar.UI_BUILDER_MAX_ARRAY_ITEMS in schema_vars
        assert EnvVar.UI_BUILDER_STRICT not in schema_vars


# =============================================================================
# Tests for convenience functions
# =============================================================================


class TestConvenienceFunctions:
    """Tests for typed convenience accessors."""

    @pytest.mark.unit
    def test_id_length_never_below_one(self, monkeypatch):
        monkeypatch.setenv("UI_BUILDER_ID_LENGTH", "0")
        assert get_id_length() == 1

    @pytest.mark.unit
    def test_derive_seed_default(self, monkeypatch):
        monkeypatch.delenv("UI_BUILDER_DERIVE_SEED", raising=False)
        assert get_derive_seed() == 1234

    @pytest.mark.unit
    def test_strict_mode_override_false_wins(self, monkeypatch):
        monkeypatch.setenv("UI_BUILDER_STRICT", "true")
        assert is_strict_mode() is True
        assert is_strict_mode(override=False) is False
