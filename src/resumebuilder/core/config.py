"""Configuration management for ResumeBuilder.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RESUMEBUILDER_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application Settings
    app_name: str = "ResumeBuilder"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"
    app_base_url: str = Field(
        default="http://localhost:8080",
        description="Public base URL used to build verification links",
    )

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8080
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/resumebuilder.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Security Settings
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="Secret key for JWT token signing",
    )
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, gt=0)
    verification_token_expire_hours: int = Field(default=24, gt=0)

    # Timeouts for collaborator calls
    store_timeout_seconds: float = Field(default=5.0, gt=0)
    email_timeout_seconds: float = Field(default=10.0, gt=0)

    # Email Settings
    email_provider: Literal["console", "smtp"] = "console"
    email_from_address: str = "no-reply@resumebuilder.local"
    email_from_name: str = "ResumeBuilder"
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:5173"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Ensure the API prefix starts with a slash and has no trailing slash."""
        v = "/" + v.strip("/")
        return "" if v == "/" else v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Refuse to run in production with the default signing secret or no SMTP host."""
        if self.is_production and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError(
                "RESUMEBUILDER_SECRET_KEY must be set to a non-default value in production."
            )
        if self.email_provider == "smtp" and not self.smtp_host:
            raise ValueError("RESUMEBUILDER_SMTP_HOST is required when email_provider is 'smtp'.")
        return self

    @property
    def verification_url_base(self) -> str:
        """Get the URL that verification tokens are appended to."""
        return f"{self.app_base_url.rstrip('/')}{self.api_prefix}/auth/verify-email"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
