"""
Centralized configuration for the Adearn backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, MAIL_*).
"""

from enum import Enum
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class CooldownProfile(str, Enum):
    """Deployment profiles for the ad-click cooldown window."""

    ONE_MINUTE = "one_minute"
    DAILY = "daily"


COOLDOWN_SECONDS = {
    CooldownProfile.ONE_MINUTE: 60,
    CooldownProfile.DAILY: 24 * 60 * 60,
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Adearn API"
    app_version: str = "0.1.0"
    app_env: str = "production"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""

    # Token signing
    token_secret: str = ""
    token_algorithm: str = "HS256"

    # Session lifetimes (seconds). The cookie may outlive the signed token.
    session_token_ttl_seconds: int = 24 * 60 * 60
    session_cookie_max_age_seconds: int = 7 * 24 * 60 * 60

    # Capability token lifetimes (minutes)
    verification_token_ttl_minutes: int = 15
    resend_verification_ttl_minutes: int = 30
    reset_token_ttl_minutes: int = 30

    # Earning
    click_cooldown_profile: CooldownProfile = CooldownProfile.DAILY

    # Passwords
    password_hash_rounds: int = 12

    # Frontend URLs (base for activation and reset links)
    frontend_url: str = "http://localhost:5173"

    # Transactional mail (Resend)
    resend_api_key: str = ""
    mail_from: str = "Adearn <no-reply@adearn.app>"
    mail_max_attempts: int = 3
    mail_retry_backoff_seconds: float = 2.0

    @property
    def click_cooldown_seconds(self) -> int:
        """Cooldown window for the configured deployment profile."""
        return COOLDOWN_SECONDS[self.click_cooldown_profile]

    @property
    def secure_cookies(self) -> bool:
        """Session cookies carry the secure flag outside development."""
        return self.app_env.lower() != "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
