"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import CooldownProfile, Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Adearn API"
        assert settings.port == 8000
        assert settings.token_algorithm == "HS256"
        assert settings.session_cookie_max_age_seconds == 7 * 24 * 60 * 60
        assert settings.verification_token_ttl_minutes == 15
        assert settings.reset_token_ttl_minutes == 30
        assert settings.click_cooldown_profile == CooldownProfile.DAILY

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        env = {
            "TOKEN_SECRET": "from-env",
            "CLICK_COOLDOWN_PROFILE": "one_minute",
            "APP_ENV": "development",
        }
        with patch.dict(os.environ, env):
            settings = Settings(_env_file=None)
        assert settings.token_secret == "from-env"
        assert settings.click_cooldown_profile == CooldownProfile.ONE_MINUTE

    def test_cooldown_profiles(self):
        assert Settings(_env_file=None, click_cooldown_profile="one_minute").click_cooldown_seconds == 60
        assert Settings(_env_file=None, click_cooldown_profile="daily").click_cooldown_seconds == 86400

    def test_secure_cookies_outside_development(self):
        assert Settings(_env_file=None, app_env="production").secure_cookies is True
        assert Settings(_env_file=None, app_env="Development").secure_cookies is False


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self):
        first = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not first
