"""
Configuration module for the profile history service.

This module provides centralized configuration management using Pydantic settings.
All configuration values can be overridden via environment variables or .env file.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for the profile history service.

    Attributes:
        SERVICE_NAME: Name used in logs and health responses
        DEBUG: Enable debug mode (shows API docs)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_JSON: Render logs as JSON instead of console output
        STORE_BACKEND: Key-value store backend (memory, file, redis)
        STORE_FILE_PATH: JSON document used by the file backend
        REDIS_URL: Connection URL used by the redis backend
        REDIS_KEY_PREFIX: Namespace prepended to every redis key
        HISTORY_MAX_ITEMS: Maximum number of usage history entries kept
        DEFAULT_QUERY_LIMIT: Number of items returned when no limit is given
        CORS_ORIGINS: Comma-separated list of allowed origins
    """

    SERVICE_NAME: str = Field(
        default="profile-history-service",
        description="Service name for log identification",
    )
    DEBUG: bool = Field(default=False, description="Enable debug mode")

    # Logging configuration
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_JSON: bool = Field(
        default=True,
        description="Render structured logs as JSON",
    )

    # Storage configuration
    STORE_BACKEND: Literal["memory", "file", "redis"] = Field(
        default="memory",
        description="Key-value store backend",
    )
    STORE_FILE_PATH: str = Field(
        default="profile_history.json",
        description="Path of the JSON document used by the file backend",
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    REDIS_KEY_PREFIX: str = Field(
        default="profile_history:",
        description="Prefix for all redis keys",
    )

    # History configuration
    HISTORY_MAX_ITEMS: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Maximum number of usage history entries kept",
    )
    DEFAULT_QUERY_LIMIT: int = Field(
        default=10,
        ge=1,
        le=200,
        description="Default number of items returned by history queries",
    )

    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("REDIS_URL")
    @classmethod
    def validate_redis_url(cls, value: str) -> str:
        """
        Validate that the Redis URL uses a supported scheme.

        Raises:
            ValueError: If URL is empty or has an unsupported scheme
        """
        if not value:
            raise ValueError("Redis URL cannot be empty")

        if not value.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(
                f"Redis URL must start with redis://, rediss:// or unix://, got: {value}"
            )

        return value

    @field_validator("STORE_FILE_PATH")
    @classmethod
    def validate_store_file_path(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Store file path cannot be empty")
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
