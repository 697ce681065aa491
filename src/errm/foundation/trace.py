"""Traced chain links: messages with the call stack captured at creation.

Every errm error owns one Traced value. Wrapping builds a new Traced whose cause
is the previous chain, so each link keeps its own stack:

    >>> root = new_traced("connection refused")
    >>> outer = wrap_traced(root, "fetch user")
    >>> render_chain(outer)
    'fetch user: connection refused'
    >>> chain_equal(outer, root)
    True

A chain may end in (or pass through) foreign exceptions; walking continues through
their ``__cause__`` the same way ``raise ... from`` links them.
"""

from __future__ import annotations

import os
import traceback
from collections.abc import Iterator
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from errm.config import get_settings

T = TypeVar("T")

Stack = tuple[traceback.FrameSummary, ...]

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep
_TESTS_DIR = _PACKAGE_DIR + "tests" + os.sep


# ═══════════════════════════════════════════════════════════════════════════════
# Stack Capture
# ═══════════════════════════════════════════════════════════════════════════════


def _is_internal(filename: str) -> bool:
    return filename.startswith(_PACKAGE_DIR) and not filename.startswith(_TESTS_DIR)


def capture_stack() -> Stack:
    """Capture the current stack (oldest first), without errm's own trailing frames."""
    settings = get_settings().stack
    frames = traceback.extract_stack()
    end = len(frames)
    if settings.trim_internal:
        while end and _is_internal(frames[end - 1].filename):
            end -= 1
    return tuple(frames[max(0, end - settings.limit):end])


def format_frame(frame: traceback.FrameSummary) -> str:
    """Render a frame as ``function:filename:lineno``."""
    return f"{frame.name}:{frame.filename}:{frame.lineno}"


# ═══════════════════════════════════════════════════════════════════════════════
# Traced Value
# ═══════════════════════════════════════════════════════════════════════════════


class Traced(Exception):
    """One link of an error chain: message, optional cause and creation stack."""

    def __init__(self, message: str, cause: BaseException | None = None, stack: Stack | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.stack: Stack = capture_stack() if stack is None else stack
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        cause = render_chain(self.cause)
        return f"{self.message}: {cause}" if self.message else cause

    def __repr__(self) -> str:
        return f"Traced({self.message!r})"


def new_traced(message: str) -> Traced:
    return Traced(message)


def wrap_traced(cause: BaseException, message: str) -> Traced:
    return Traced(message, cause)


# ═══════════════════════════════════════════════════════════════════════════════
# Chain Walking
# ═══════════════════════════════════════════════════════════════════════════════


def _next_link(err: BaseException) -> BaseException | None:
    if isinstance(err, Traced):
        return err.cause
    # errm.Error and anything else exposing the Traced it owns
    if isinstance(inner := getattr(err, "traced", None), Traced):
        return inner
    return err.__cause__


def walk(err: BaseException | None) -> Iterator[BaseException]:
    """Yield err and every link it wraps, outermost first. Cycles end the walk."""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = _next_link(err)


def chain_equal(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether target is err itself or any link err wraps."""
    if err is None or target is None:
        return err is target
    return any(link is target for link in walk(err))


def as_type(err: BaseException | None, cls: type[T]) -> T | None:
    """Return the first link in err's chain that is an instance of cls."""
    for link in walk(err):
        if isinstance(link, cls):
            return link
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# Rendering
# ═══════════════════════════════════════════════════════════════════════════════


def render_chain(err: BaseException, verbose: bool = False) -> str:
    """Render err's chain as one line, or with every link's stack when verbose."""
    if not verbose:
        return str(err)
    traced = [link for link in walk(err) if isinstance(link, Traced)]
    lines: list[str] = []
    for link in walk(err):
        if isinstance(link, Traced):
            lines.append(link.message)
            # the innermost traced link carries the full stack, outer ones their call site
            frames = reversed(link.stack) if link is traced[-1] else link.stack[-1:]
            lines.extend(f"\t{format_frame(f)}" for f in frames)
        elif not isinstance(getattr(link, "traced", None), Traced):
            lines.append("".join(traceback.format_exception_only(link)).rstrip())
    return "\n".join(lines)


class RootNode(BaseModel):
    """Innermost traced link with its full stack, newest frame first."""

    model_config = ConfigDict(frozen=True)

    message: str
    stack: list[str]


class WrapNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    stack: str | None = None


class ChainTree(BaseModel):
    """Structured form of a chain: root link, outer wrap links, foreign cause."""

    model_config = ConfigDict(frozen=True)

    root: RootNode | None = None
    wrap: list[WrapNode] | None = None
    external: str | None = None


def build_tree(err: BaseException) -> ChainTree:
    traced = [link for link in walk(err) if isinstance(link, Traced)]
    if not traced:
        return ChainTree(external=str(err))
    *outer, root = traced
    return ChainTree(
        root=RootNode(message=root.message, stack=[format_frame(f) for f in reversed(root.stack)]),
        wrap=[WrapNode(message=w.message, stack=format_frame(w.stack[-1]) if w.stack else None)
              for w in outer] or None,
        external=str(root.cause) if root.cause is not None else None,
    )


def render_tree(err: BaseException) -> dict[str, object]:
    """Render err's chain as a JSON-compatible dict.

    Example:
        >>> render_tree(wrap_traced(ValueError("bad port"), "load config"))
        {'root': {'message': 'load config', 'stack': ['main:app.py:12', ...]}, 'external': 'bad port'}
    """
    return build_tree(err).model_dump(exclude_none=True)
