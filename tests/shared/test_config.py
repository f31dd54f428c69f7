"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import DEFAULT_JWT_SECRET, Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Firstmakers API"
        assert settings.port == 8080
        assert settings.jwt_algorithm == "HS256"
        assert settings.access_token_ttl_seconds == 3600
        assert settings.reset_token_ttl_seconds == 3600
        assert settings.activation_token_ttl_seconds == 30 * 24 * 3600
        assert settings.refresh_token_bytes == 40
        assert settings.token_sources == ["header", "query", "body"]
        assert settings.smtp_enabled is False
        assert settings.uses_default_secret is True
        assert settings.jwt_secret == DEFAULT_JWT_SECRET

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"JWT_SECRET": "s3cret", "PORT": "9000", "SMTP_PASSWORD": "hunter2-smtp"}):
            settings = Settings()
        assert settings.port == 9000
        assert settings.uses_default_secret is False
        assert settings.smtp_password.get_secret_value() == "hunter2-smtp"
        assert "hunter2-smtp" not in repr(settings)

    def test_token_sources_from_env(self):
        with patch.dict(os.environ, {"TOKEN_SOURCES": '["query"]'}):
            assert Settings().token_sources == ["query"]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
