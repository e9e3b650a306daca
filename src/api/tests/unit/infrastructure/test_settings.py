"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    AuthSettings,
    DatabaseSettings,
    Settings,
    get_auth_settings,
    get_database_settings,
    get_settings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections
        assert settings.pool_max_connections <= 20

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        """Should allow max == min."""
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_min_connections == 5
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        """Pool min connections must be >= 1."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        """Pool max should not exceed reasonable limit."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)


class TestDatabaseSettingsEnvironment:
    """Tests for environment-driven configuration."""

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("ARBY_DB_HOST", "db.internal")
        monkeypatch.setenv("ARBY_DB_PORT", "6543")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(password="hunter2")

        assert "hunter2" not in settings.connection_string
        assert settings.connection_string.startswith("postgresql://")


class TestAuthSettings:
    """Tests for token verification settings."""

    def test_defaults(self):
        settings = AuthSettings()

        assert settings.jwt_algorithm == "HS256"
        assert settings.jwt_audience is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("ARBY_AUTH_JWT_SECRET", "s3cret")
        monkeypatch.setenv("ARBY_AUTH_JWT_AUDIENCE", "arby")

        settings = AuthSettings()

        assert settings.jwt_secret.get_secret_value() == "s3cret"
        assert settings.jwt_audience == "arby"

    def test_secret_is_masked(self):
        settings = AuthSettings(jwt_secret="s3cret")

        assert "s3cret" not in repr(settings)


class TestCachedGetters:
    """Tests for lru_cache settings getters."""

    def test_getters_return_same_instance(self):
        assert get_settings() is get_settings()
        assert get_database_settings() is get_database_settings()
        assert get_auth_settings() is get_auth_settings()

    def test_settings_exposes_sections(self):
        settings = Settings()

        assert settings.database is get_database_settings()
        assert settings.auth is get_auth_settings()
