"""Unit tests for configuration module."""

from __future__ import annotations

import pytest

from sqlitepp.infrastructure.config import Config, DatabaseConfig, ObservabilityConfig, get_config


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = Config()

        assert config.database.path == ":memory:"
        assert config.database.timeout_seconds == 5.0
        assert config.database.vacuum_on_close is False
        assert config.observability.log_level == "INFO"
        assert config.is_memory

    def test_custom_database_config(self) -> None:
        config = Config(database=DatabaseConfig(path="/tmp/app.db", timeout_seconds=1.5))

        assert config.database.path == "/tmp/app.db"
        assert not config.is_memory

    def test_invalid_timeout(self) -> None:
        """Negative timeouts raise a validation error."""
        with pytest.raises(ValueError):
            DatabaseConfig(timeout_seconds=-1)

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ValueError):
            ObservabilityConfig(log_format="xml")  # type: ignore[arg-type]

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Nested settings are read from SQLITEPP_ variables."""
        monkeypatch.setenv("SQLITEPP_DATABASE__PATH", "data.db")
        monkeypatch.setenv("SQLITEPP_OBSERVABILITY__LOG_LEVEL", "DEBUG")

        config = Config()

        assert config.database.path == "data.db"
        assert config.observability.log_level == "DEBUG"


@pytest.mark.unit
class TestConfigSingleton:
    """Tests for get_config singleton."""

    def test_get_config_returns_same_instance(self) -> None:
        """Test that get_config returns the same instance."""
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2
