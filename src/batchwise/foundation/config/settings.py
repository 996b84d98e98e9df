"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated defaults for the scheduler and logging,
loaded from environment variables or a .env file.

Example:
    >>> from batchwise.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.batch.size
    10
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # BATCHWISE_BATCH__SIZE=25
    # BATCHWISE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, NonNegativeFloat, PositiveInt, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BatchSettings(BaseSettings):
    """Default batch width and inter-batch pause."""

    model_config = SettingsConfigDict(
        env_prefix="BATCHWISE_BATCH_",
        extra="ignore",
    )

    size: PositiveInt = Field(default=10, description="Items per batch (concurrency width)")
    delay_ms: NonNegativeFloat = Field(default=0.0, description="Pause between batches in milliseconds")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BATCHWISE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v


class BatchwiseSettings(BaseSettings):
    """Root settings for batchwise.

    Loads configuration from environment variables with BATCHWISE_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        BATCHWISE_DEBUG=true
        BATCHWISE_BATCH__SIZE=50
        BATCHWISE_BATCH__DELAY_MS=250
        BATCHWISE_LOGGING__FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="BATCHWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    batch: BatchSettings = Field(default_factory=BatchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Debug mode forces DEBUG logging."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> BatchwiseSettings:
    """Get the global settings instance (cached)."""
    return BatchwiseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
