"""Shared fixtures: fresh settings and logging for every test."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from errm.config import clear_settings_cache
from errm.logging import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Reset cached settings and logging configuration around each test."""
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def json_log() -> io.StringIO:
    """Route DEBUG-and-up logs as JSON lines into a buffer."""
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)
    return buf

