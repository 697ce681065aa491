"""Structured logging with bound context.

Provides context-aware structured logging for errm and its callers:
- Bound key/value context (immutable, bind() returns a new logger)
- Human-readable console output, JSON lines for production
- Error logging with the captured stack attached as a field

Quick Start:
    >>> from errm.logging import get_logger, configure_logging
    >>>
    >>> # Configure (once at startup)
    >>> configure_logging(format="console", level="INFO")  # or "json" for production
    >>>
    >>> log = get_logger("billing")
    >>> log.info("charging card", order_id=123)

    >>> # Log an errm error together with its stack trace
    >>> log.error_with_stack("charge failed", err, order_id=123)
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

JsonDict = dict[str, Any]

# Context var for scoped context (persists across async calls)
_log_context: ContextVar[JsonDict] = ContextVar("log_context", default={})


# ─────────────────────────────────────────────────────────────────────────────
# Core Logger Implementation
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. Immutable - bind() returns a new logger with merged context.

    Level and renderer fall back to the global configuration at call time, so
    module-level loggers follow later configure_logging() calls.

    Example:
        >>> log = BoundLogger(context={"service": "api"})
        >>> log.warning("request rejected", path="/users")
        # => 10:30:45.120 [warning] request rejected path="/users" service="api"
    """

    context: JsonDict = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **kw: object) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def unbind(self, *keys: str) -> BoundLogger:
        """Create new logger without specified keys."""
        return BoundLogger(context={k: v for k, v in self.context.items() if k not in keys},
                           _renderer=self._renderer, _level=self._level)

    def is_enabled_for(self, level: int) -> bool:
        if self._level is not None:
            return level >= self._level
        if not _configured:
            configure_logging()
        return level >= _default_level

    def _log(self, level: int, event: str, **kw: object) -> None:
        if not self.is_enabled_for(level):
            return
        merged = {**_log_context.get(), **self.context, **kw}
        (self._renderer or _get_renderer()).render(LogEntry(time.time(), _level_name(level), event, merged))

    def debug(self, event: str, **kw: object) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: object) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: object) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: object) -> None: self._log(logging.ERROR, event, **kw)

    def exception(self, event: str, **kw: object) -> None:
        """Log error with exception info."""
        import traceback
        self._log(logging.ERROR, event, exc_info=traceback.format_exc(), **kw)

    def error_with_stack(self, event: str, err: BaseException | None, **kw: object) -> None:
        """Log err at ERROR level with its message and, for errm errors, its root stack.

        Example:
            >>> log.error_with_stack("sync failed", errm.wrap(exc, "sync", "user", 7))
            # => ... [error] sync failed error="sync user=7: timeout" stack=[9 items]
        """
        if not self.is_enabled_for(logging.ERROR):
            return
        from errm.foundation.errors import stack_for_logger

        fields: JsonDict = {"error": str(err) if err is not None else None}
        if err is not None and (pair := stack_for_logger(err)) is not None:
            key, stack = pair
            fields[key] = stack
        self._log(logging.ERROR, event, **fields, **kw)

    def scope(self, **kw: object) -> log_context:
        """Create a scoped logging context.

        Example:
            >>> with log.scope(request_id="abc123"):
            ...     log.warning("slow")  # includes request_id
        """
        return log_context(**kw)


@dataclass(slots=True)
class LogEntry:
    """Log entry with all context."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """Human-readable timestamp (HH:MM:SS.mmm)."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        parts = ([f"{c['dim']}{entry.ts_human}{c['reset']}"] if self.show_timestamp else [])
        parts += [f"{_LEVEL_COLORS.get(entry.level, c['dim']) if self.colors else ''}[{entry.level}]{c['reset']}",
                  f"{c['bold']}{entry.event}{c['reset']}"]
        parts += [f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}"
                  for k, v in sorted(entry.context.items()) if k != "exc_info"]
        print(" ".join(parts), file=self.output)
        if "exc_info" in entry.context:
            print(f"{c['red']}{entry.context['exc_info']}{c['reset']}", file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation (Elasticsearch, Loki, Datadog, etc.)."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        print(orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event,
                            **entry.context}, option=orjson.OPT_NON_STR_KEYS, default=str).decode(),
              file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: LogRenderer | None = None
_default_level: int = logging.WARNING
_configured = False


def configure_logging(
    format: str | None = None,  # noqa: A002 - shadows builtin but matches stdlib
    level: str | None = None,
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure global structured logging. Format: "console" (human), "json" (machine), "none".

    Unset arguments are taken from ERRM_LOG_* settings.
    """
    global _renderer, _default_level, _configured
    from errm.config import get_settings

    settings = get_settings().logging
    format = format or settings.format
    _default_level = getattr(logging, (level or settings.level).upper(), logging.WARNING)
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer, _configured = renderer, True
    return renderer


def reset_logging() -> None:
    """Drop global configuration; the next log call re-reads settings."""
    global _renderer, _default_level, _configured
    _renderer, _default_level, _configured = None, logging.WARNING, False


def get_logger(name: str | None = None, **initial_context: object) -> BoundLogger:
    """Get a structured logger with optional initial context. Name is added to context as 'logger'."""
    ctx = {**initial_context, **({"logger": name} if name else {})}
    return BoundLogger(context=ctx)


def _get_renderer() -> LogRenderer:
    """Get configured renderer or configure from settings."""
    return _renderer if _configured and _renderer is not None else configure_logging()


class log_context:
    """Context manager for scoped logging context. Adds key-value pairs to all log entries within the scope."""

    __slots__ = ("_ctx", "_token")

    def __init__(self, **kw: object) -> None:
        self._ctx: JsonDict = dict(kw)
        self._token: object | None = None

    def __enter__(self) -> log_context:
        self._token = _log_context.set({**_log_context.get(), **self._ctx})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        self._token and _log_context.reset(self._token)  # type: ignore[func-returns-value,arg-type]


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
           "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m", "white": "\033[37m"}
_NO_COLORS = {k: "" for k in _COLORS}
_LEVEL_COLORS = {"debug": _COLORS["dim"], "info": _COLORS["green"], "warning": _COLORS["yellow"], "error": _COLORS["red"]}


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    """Format a value for console output."""
    match v:
        case str(): return f'{c["yellow"]}"{v}"{c["reset"]}'
        case bool(): return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
        case int() | float(): return f'{c["blue"]}{v}{c["reset"]}'
        case dict(): return f'{c["dim"]}{{{len(v)} items}}{c["reset"]}'
        case list() | tuple(): return f'{c["dim"]}[{len(v)} items]{c["reset"]}'
        case None: return f'{c["dim"]}null{c["reset"]}'
        case _: return f'{c["white"]}{v!r}{c["reset"]}'
