"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./compliance_feed.db",
        description="SQLAlchemy URL of the key-value store holding notification state",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key used to validate session tokens",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to stamp notifications",
    )
    vendor_api_base_url: str = Field(
        default="http://localhost:3001/api",
        description="Base URL of the marketplace API serving vendor profiles and documents",
        min_length=1,
    )
    vendor_api_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every vendor API request",
        gt=0,
    )
    status_poll_interval_seconds: float = Field(
        default=5.0,
        description="Seconds between two document status polls",
        ge=0,
    )
    notification_limit: int = Field(
        default=50,
        description="Maximum number of notifications retained per identity",
        gt=0,
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level configured at application start",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
