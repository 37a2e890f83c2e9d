"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    FetchbatchSettings,
    LoggingSettings,
    RuntimeSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "FetchbatchSettings",
    "LoggingSettings",
    "RuntimeSettings",
    "clear_settings_cache",
    "get_settings",
]
