# 📄 File: authhub/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and hands them to the rest of the account service in one organized place.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for server, database, redis, JWT and SMTP parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - authhub.main (application startup)
# - authhub.shared.core.dependencies (composition root)
# - authhub.shared.utils.logging (log level / format)
# - Database, redis and email adapters

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="AuthHub API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Authentication and user management service",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json or text)")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    PROTOCOL: str = Field(default="http", description="Public protocol")
    RELOAD: bool = Field(default=False, description="Auto-reload on changes")
    API_V1_PREFIX: str = Field(default="/api/v1", description="Version 1 API prefix")
    PUBLIC_BASE_URL: str = Field(
        default="",
        description="Base URL used in links sent by email (derived from host/port when empty)"
    )

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./authhub.db",
        description="SQLAlchemy async database URL"
    )
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")

    # =========================================================================
    # REDIS CONFIGURATION
    # =========================================================================

    REDIS_URL: str = Field(default="redis://localhost:6379/0", description="Redis URL")
    REDIS_BLACKLIST_PREFIX: str = Field(
        default="authhub:blacklist:",
        description="Key prefix for revoked JWTs"
    )

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    JWT_SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="JWT secret key"
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=30,
        description="JWT access token expiry"
    )
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = Field(
        default=30,
        description="JWT refresh token expiry"
    )
    JWT_RESET_PASSWORD_EXPIRE_MINUTES: int = Field(
        default=10,
        description="Password reset token expiry"
    )
    JWT_VERIFY_EMAIL_EXPIRE_MINUTES: int = Field(
        default=10,
        description="Email verification token expiry"
    )
    BCRYPT_ROUNDS: int = Field(default=12, description="bcrypt cost factor")

    # =========================================================================
    # EMAIL CONFIGURATION
    # =========================================================================

    SMTP_ENABLED: bool = Field(default=False, description="Send real email through SMTP")
    SMTP_HOST: str = Field(default="localhost", description="SMTP server host")
    SMTP_PORT: int = Field(default=587, description="SMTP server port")
    SMTP_USE_TLS: bool = Field(default=True, description="Use STARTTLS")
    SMTP_USERNAME: str = Field(default="", description="SMTP username")
    SMTP_PASSWORD: str = Field(default="", description="SMTP password")
    SMTP_TIMEOUT: int = Field(default=10, description="SMTP socket timeout (seconds)")
    EMAIL_FROM: str = Field(default="no-reply@authhub.local", description="Sender address")
    EMAIL_SUBJECT_PREFIX: str = Field(default="[PPL]", description="Subject prefix")

    # =========================================================================
    # CORS CONFIGURATION
    # =========================================================================

    CORS_ORIGINS: str = Field(default="*", description="Comma separated allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="Allow credentials")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "test", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def public_base_url(self) -> str:
        """Base URL for links embedded in outgoing emails."""
        if self.PUBLIC_BASE_URL:
            return self.PUBLIC_BASE_URL.rstrip("/")
        return f"{self.PROTOCOL}://{self.HOST}:{self.PORT}"


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
