"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from errm.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.stack.limit)
    64
    >>> print(settings.logging.level)
    'WARNING'

    # Or with environment variables:
    # ERRM_STACK_LIMIT=16
    # ERRM_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StackSettings(BaseSettings):
    """Stack capture configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERRM_STACK_",
        extra="ignore",
    )

    limit: PositiveInt = Field(default=64, description="Max frames captured per error")
    trim_internal: bool = Field(default=True, description="Drop errm's own frames from captured stacks")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERRM_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ErrmSettings(BaseSettings):
    """Root settings for errm.

    Loads configuration from environment variables with ERRM_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        ERRM_STACK_LIMIT=32
        ERRM_STACK_TRIM_INTERNAL=false
        ERRM_LOG_LEVEL=DEBUG
        ERRM_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRM_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    stack: StackSettings = Field(default_factory=StackSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> ErrmSettings:
    """Get the global settings instance (cached).

    Example:
        >>> get_settings().stack.trim_internal
        True
    """
    return ErrmSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
