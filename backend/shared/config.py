"""
Centralized configuration for the Shipmates backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., JWT_*, SMTP_*, SUPABASE_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Shipmates API"
    app_version: str = "0.1.0"
    environment: str = "development"  # development | staging | production
    debug: bool = False
    log_level: str = "INFO"

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Account store: "supabase" or "memory" (local development only)
    account_store_backend: str = "supabase"

    # Session tokens
    jwt_access_secret: str = ""
    jwt_refresh_secret: str = ""
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    # Verification codes
    email_code_timeout_minutes: int = 10
    max_email_code_attempts: int = 5

    # Password hashing work factor
    bcrypt_rounds: int = 12

    # Outbound email: "console", "smtp" or "resend"
    email_mode: str = "console"
    email_from_address: str = "noreply@example.com"
    email_from_name: str = "Shipmates"
    resend_api_key: str = ""
    smtp_host: str = ""
    smtp_port: int = 465
    smtp_user: str = ""
    smtp_password: str = ""

    # Frontend URLs (for links in emails)
    frontend_url: str = "http://localhost:5173"

    def is_production(self) -> bool:
        """Whether the app runs with production transport settings."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
