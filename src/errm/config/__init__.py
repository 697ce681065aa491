"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    ErrmSettings,
    LoggingSettings,
    StackSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ErrmSettings",
    "LoggingSettings",
    "StackSettings",
    "clear_settings_cache",
    "get_settings",
]
