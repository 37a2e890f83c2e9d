"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from fetchbatch.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.runtime.skip_empty_resolve
    True
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # FETCHBATCH_RUNTIME_VALIDATE_RESOLVED=true
    # FETCHBATCH_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Defaults for the execution driver."""

    model_config = SettingsConfigDict(
        env_prefix="FETCHBATCH_RUNTIME_",
        extra="ignore",
    )

    validate_resolved: bool = Field(
        default=False,
        description="Check every resolve result for completeness right after the call",
    )
    skip_empty_resolve: bool = Field(
        default=True,
        description="Skip the resolve call entirely when no keys are required",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FETCHBATCH_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"
    include_timestamps: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class FetchbatchSettings(BaseSettings):
    """Root settings for fetchbatch.

    Loads configuration from environment variables with FETCHBATCH_ prefix.

    Example environment variables:
        FETCHBATCH_RUNTIME_VALIDATE_RESOLVED=true
        FETCHBATCH_RUNTIME_SKIP_EMPTY_RESOLVE=false
        FETCHBATCH_LOG_LEVEL=DEBUG
        FETCHBATCH_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="FETCHBATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def strict(self) -> bool:
        """Whether resolve results are validated eagerly (debug implies it)."""
        return self.debug or self.runtime.validate_resolved


@lru_cache(maxsize=1)
def get_settings() -> FetchbatchSettings:
    """Get the global settings instance (cached)."""
    return FetchbatchSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
