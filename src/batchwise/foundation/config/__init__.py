"""Configuration management using pydantic-settings."""

from .settings import (
    BatchSettings,
    BatchwiseSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BatchSettings",
    "BatchwiseSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
