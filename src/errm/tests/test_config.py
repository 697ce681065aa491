"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from errm.config import ErrmSettings, clear_settings_cache, get_settings


def test_defaults() -> None:
    settings = ErrmSettings()
    assert settings.stack.limit == 64
    assert settings.stack.trim_internal is True
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "console"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRM_STACK_LIMIT", "8")
    monkeypatch.setenv("ERRM_LOG_FORMAT", "json")
    clear_settings_cache()

    settings = get_settings()
    assert settings.stack.limit == 8
    assert settings.logging.format == "json"


def test_settings_are_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("ERRM_STACK_LIMIT", "3")
    assert get_settings() is first

    clear_settings_cache()
    assert get_settings().stack.limit == 3


def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRM_STACK_LIMIT", "0")
    with pytest.raises(ValidationError):
        ErrmSettings()
