"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Shipmates API"
        assert settings.environment == "development"
        assert settings.account_store_backend == "supabase"
        assert settings.jwt_algorithm == "HS256"
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.email_code_timeout_minutes == 10
        assert settings.max_email_code_attempts == 5
        assert settings.email_mode == "console"

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {
            "JWT_ACCESS_SECRET": "a",
            "JWT_REFRESH_SECRET": "r",
            "MAX_EMAIL_CODE_ATTEMPTS": "3",
            "ACCOUNT_STORE_BACKEND": "memory",
        }):
            settings = Settings(_env_file=None)
            assert settings.jwt_access_secret == "a"
            assert settings.jwt_refresh_secret == "r"
            assert settings.max_email_code_attempts == 3
            assert settings.account_store_backend == "memory"

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"

    def test_is_production(self):
        assert Settings(_env_file=None, environment="production").is_production() is True
        assert Settings(_env_file=None, environment="Production").is_production() is True
        assert Settings(_env_file=None, environment="development").is_production() is False


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self):
        """get_settings should return the same instance until the cache is cleared."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
