"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.core.enums import Environment


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("ENVIRONMENT", "DATABASE_URL", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.is_development
        assert settings.is_sqlite
        assert settings.api_v1_prefix == "/api/v1"
        assert settings.principal_header == "X-Principal-Id"
        assert settings.slug_suffix_length == 6
        assert settings.slug_max_attempts == 5
        assert settings.events_strict_mode is True

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/orgs")
        monkeypatch.setenv("SLUG_MAX_ATTEMPTS", "9")

        settings = Settings(_env_file=None)

        assert settings.is_production
        assert not settings.is_sqlite
        assert settings.slug_max_attempts == 9

    def test_log_level_normalised(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_trailing_slash_stripped(self):
        settings = Settings(_env_file=None, api_base_url="https://api.example.com/")

        assert settings.api_base_url == "https://api.example.com"

    @pytest.mark.parametrize("field", ["slug_suffix_length", "slug_max_attempts"])
    def test_slug_limits_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_testing_environment_from_conftest(self):
        from src.core.config import settings

        assert settings.is_testing
