"""Tests for the structured logger, renderers and settings-driven configuration."""

from __future__ import annotations

import io

import orjson
import pytest

from errm import new, wrap
from errm.config import clear_settings_cache, get_settings
from errm.logging import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    NoOpRenderer,
    configure_logging,
    get_logger,
    log_context,
)


def test_console_renderer_line() -> None:
    buf = io.StringIO()
    configure_logging(format="console", level="INFO", output=buf)

    get_logger("billing", order=7).info("charging", amount=1.5, ok=True)

    line = buf.getvalue().strip()
    assert "[info] charging" in line
    assert "amount=1.5" in line
    assert 'logger="billing"' in line
    assert "ok=true" in line
    assert "order=7" in line
    assert "\033[" not in line


def test_level_filtering() -> None:
    buf = io.StringIO()
    configure_logging(format="json", level="WARNING", output=buf)
    log = get_logger()

    log.info("hidden")
    log.warning("shown")

    events = [orjson.loads(line)["event"] for line in buf.getvalue().splitlines()]
    assert events == ["shown"]


def test_bind_and_scope() -> None:
    buf = io.StringIO()
    log = BoundLogger(_renderer=JsonRenderer(output=buf), _level=0)

    bound = log.bind(request="r1", user="u1").unbind("user")
    with log_context(tenant="acme"):
        bound.info("scoped")
    bound.info("unscoped")

    first, second = (orjson.loads(line) for line in buf.getvalue().splitlines())
    assert first["tenant"] == "acme"
    assert first["request"] == "r1"
    assert "user" not in first
    assert "tenant" not in second


def test_error_with_stack_json(json_log: io.StringIO) -> None:
    err = wrap(new("connection refused"), "sync", "user", 7)

    get_logger("sync").error_with_stack("sync failed", err, attempt=2)

    entry = orjson.loads(json_log.getvalue())
    assert entry["event"] == "sync failed"
    assert entry["level"] == "error"
    assert entry["error"] == "sync user=7: connection refused"
    assert entry["attempt"] == 2
    assert entry["stack"][0].startswith("test_error_with_stack_json:")


def test_error_with_stack_foreign_error(json_log: io.StringIO) -> None:
    get_logger().error_with_stack("failed", ValueError("bad"))

    entry = orjson.loads(json_log.getvalue())
    assert entry["error"] == "bad"
    assert "stack" not in entry


def test_json_renderer_serializes_arbitrary_values(json_log: io.StringIO) -> None:
    get_logger().warning("odd value", err=new("x"))
    assert orjson.loads(json_log.getvalue())["err"] == "x"


def test_configure_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRM_LOG_FORMAT", "none")
    monkeypatch.setenv("ERRM_LOG_LEVEL", "debug")
    clear_settings_cache()

    assert get_settings().logging.level == "DEBUG"
    assert isinstance(configure_logging(), NoOpRenderer)
    assert get_logger().is_enabled_for(10)


def test_configure_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(format="xml")


def test_console_renderer_colors() -> None:
    buf = io.StringIO()
    ConsoleRenderer(output=buf, colors=True, show_timestamp=False).render(LogEntry(0.0, "error", "boom", {}))
    assert buf.getvalue().startswith("\033[31m[error]")
