"""Inline key=value fields and printf-style argument handling for error messages."""

from __future__ import annotations

import re
from collections.abc import Sequence

from errm.logging import get_logger

_log = get_logger("errm")

# Go-style verbs callers tend to carry over; both print the operand's string form
_GO_VERBS = re.compile(r"%[vw]")


def sprint(value: object) -> str:
    """Render a field value as a single token.

    Sequences render space-separated in brackets and mappings as ``map[k:v]``,
    everything else through ``str()``.

    Examples:
        >>> sprint([123, 321])
        '[123 321]'
        >>> sprint({"a": 1})
        'map[a:1]'
    """
    match value:
        case str():
            return value
        case list() | tuple() | set() | frozenset():
            return f"[{' '.join(sprint(v) for v in value)}]"
        case dict():
            return f"map[{' '.join(f'{sprint(k)}:{sprint(v)}' for k, v in value.items())}]"
        case _:
            return str(value)


def build_message(base: str, fields: Sequence[object]) -> str:
    """Append ``key=value`` pairs from a flat ``k1, v1, k2, v2, ...`` sequence to base.

    A dangling last key is dropped and pairs whose key is not a str are skipped.

    Example:
        >>> build_message("timeout", ["host", "db-1", 7, "skipped", "retries", 3, "dangling"])
        'timeout host=db-1 retries=3'
    """
    if len(fields) < 2:
        return base
    parts = [base]
    for i in range(0, len(fields) - 1, 2):
        key = fields[i]
        if not isinstance(key, str):
            continue
        parts.append(f" {key}={sprint(fields[i + 1])}")
    return "".join(parts)


def split_args(msg: str, args: Sequence[object]) -> tuple[tuple[object, ...], tuple[object, ...]]:
    """Split args into (format args, fields) by the number of ``%`` characters in msg.

    Every ``%`` counts, so ``%%`` takes two arguments. With no ``%`` at all every arg
    is a field; with fewer args than placeholders every arg is a format arg.
    """
    args = tuple(args)
    n = msg.count("%")
    if n == 0:
        return (), args
    if n <= len(args):
        return args[:n], args[n:]
    return args, ()


def sprintf(msg: str, args: Sequence[object]) -> str:
    """Format msg with printf-style args. Never raises; bad input falls back to a plain join."""
    try:
        return _GO_VERBS.sub("%s", msg) % tuple(args)
    except (TypeError, ValueError) as exc:
        _log.debug("format fallback", format=msg, args=len(args), error=str(exc))
        return " ".join([msg, *(sprint(a) for a in args)])
