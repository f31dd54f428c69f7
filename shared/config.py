"""
Centralized configuration for the Firstmakers backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SMTP_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


# Used when JWT_SECRET is not set. Fine for local development only.
DEFAULT_JWT_SECRET = "firstmakers-development-secret"

TokenSource = Literal["header", "query", "body"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Firstmakers API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct postgres URI, migrations only

    # Tokens
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = 60 * 60
    reset_token_ttl_seconds: int = 60 * 60
    activation_token_ttl_seconds: int = 60 * 60 * 24 * 30
    refresh_token_bytes: int = 40

    # Where the auth middleware looks for a bearer token, in order
    token_sources: list[TokenSource] = ["header", "query", "body"]
    token_field: str = "access_token"

    # Password hashing
    bcrypt_rounds: int = 12

    # SMTP
    smtp_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: Optional[SecretStr] = None
    smtp_use_tls: bool = True
    smtp_starttls: bool = True
    smtp_from_email: str = "noreply@firstmakers.com"
    smtp_from_name: str = "Firstmakers"

    # Frontend URLs (for links in emails)
    frontend_url: str = "http://localhost:5173"

    @property
    def uses_default_secret(self) -> bool:
        """True when tokens are signed with the built-in development secret."""
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
