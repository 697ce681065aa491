"""Errors with inline fields and captured stacks.

Construction:
    >>> err = new("user not found", "user_id", 42)
    >>> str(err)
    'user not found user_id=42'
    >>> str(errorf("retry %d of %d", 2, 5, "host", "db-1"))
    'retry 2 of 5 host=db-1'
    >>> str(wrap(err, "load profile", "tenant", "acme"))
    'load profile tenant=acme: user not found user_id=42'

Inspection:
    >>> is_(wrap(err, "load profile"), err)
    True
    >>> contains(wrap(err, "load profile"), "user_id=42")
    True

Stack traces are kept per link and shown with ``format(err, "+")`` or
exported with ``to_json(err)`` / ``stack_for_logger(err)``.
"""

from __future__ import annotations

from collections.abc import Iterable

from .fields import build_message, split_args, sprintf
from .trace import Traced, as_type, new_traced, render_chain, render_tree, walk, wrap_traced

_VERBOSE_SPECS = frozenset({"+", "+v"})


# ═══════════════════════════════════════════════════════════════════════════════
# Error Value
# ═══════════════════════════════════════════════════════════════════════════════


class Error(Exception):
    """Error produced by errm: a message with fields baked in and a traced chain.

    ``str(err)`` gives the message, ``format(err, "+")`` adds every link's stack.
    Raise it like any exception; inspect it with is_ / contains / to_json.
    """

    def __init__(self, traced: Traced | str) -> None:
        if isinstance(traced, str):
            traced = new_traced(traced)
        super().__init__(traced.message)
        self._traced = traced

    @property
    def traced(self) -> Traced:
        return self._traced

    @property
    def message(self) -> str:
        return str(self._traced)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"Error({self.message!r})"

    def __format__(self, spec: str) -> str:
        if spec in _VERBOSE_SPECS:
            return render_chain(self._traced, verbose=True)
        return format(self.message, spec)

    def stack_for_logger(self) -> tuple[str, object] | None:
        """Return ``("stack", [...])`` for use as a logger field, None without a root stack."""
        return stack_for_logger(self)


def unwrap(err: BaseException) -> BaseException:
    """Return the Traced owned by err when err is an Error, err itself otherwise."""
    return err.traced if isinstance(err, Error) else err


def check(err: BaseException | None) -> bool:
    """Report whether err, or anything in its cause chain, was built by errm."""
    return as_type(err, Error) is not None


# ═══════════════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════════════


def new(msg: str, *fields: object) -> Error:
    """Create an error from msg and ``key, value`` field pairs."""
    return Error(new_traced(build_message(msg, fields)))


def errorf(msg: str, *args: object) -> Error:
    """Create an error from a printf-style msg.

    The first ``msg.count("%")`` args format the message and the rest are field
    pairs. Without any ``%`` every arg is a field.
    """
    fmt_args, fields = split_args(msg, args)
    if not fmt_args:
        return new(msg, *fields)
    return Error(new_traced(build_message(sprintf(msg, fmt_args), fields)))


def wrap(err: BaseException | None, msg: str, *fields: object) -> Error:
    """Add context to err, keeping err (and its stack) as the cause. None behaves as new()."""
    if err is None:
        return new(msg, *fields)
    return Error(wrap_traced(unwrap(err), build_message(msg, fields)))


def wrapf(err: BaseException | None, msg: str, *args: object) -> Error:
    """Add printf-style context to err. None behaves as errorf().

    Unlike errorf(), a msg without ``%`` drops the args instead of using them as fields.
    """
    if err is None:
        return errorf(msg, *args)
    fmt_args, fields = split_args(msg, args)
    if not fmt_args:
        return wrap(err, msg)
    return Error(wrap_traced(unwrap(err), build_message(sprintf(msg, fmt_args), fields)))


# ═══════════════════════════════════════════════════════════════════════════════
# Inspection
# ═══════════════════════════════════════════════════════════════════════════════


def is_(err: BaseException | None, target: BaseException | None, *targets: BaseException | None) -> bool:
    """Report whether any link in err's chain is target or one of targets.

    Composite errors from List.err() / Set.err() match when any member does.

    Example:
        >>> base = ValueError("bad input")
        >>> is_(wrap(base, "parse"), KeyError("x"), base)
        True
    """
    from errm.aggregate import ListError, SetError

    if err is None:
        return target is None or any(t is None for t in targets)
    wanted = [unwrap(t) for t in (target, *targets) if t is not None]
    for link in walk(err):
        match link:
            case SetError() | ListError():
                return link.has(target, *targets)
        if any(link is w for w in wanted):
            return True
    return False


def contains(err: BaseException | None, target: str) -> bool:
    """Report whether err's rendered chain contains the target substring."""
    return err is not None and target in render_chain(unwrap(err))


def contains_err(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether err's rendered chain contains target's rendered chain."""
    return target is not None and contains(err, render_chain(unwrap(target)))


def to_json(err: BaseException | None) -> dict[str, object]:
    """Return err's chain as a JSON-compatible dict with ``root``, ``wrap`` and ``external`` keys."""
    if err is None:
        return {}
    return render_tree(unwrap(err))


def stack_for_logger(err: BaseException | None) -> tuple[str, object] | None:
    """Return ``("stack", [...])`` with err's root stack for logging, None if it has none.

    Example:
        >>> key, stack = stack_for_logger(new("boom"))
        >>> log.error("failed", **{key: stack})
    """
    root = to_json(err).get("root")
    if not isinstance(root, dict) or "stack" not in root:
        return None
    return "stack", root["stack"]


# ═══════════════════════════════════════════════════════════════════════════════
# Joining
# ═══════════════════════════════════════════════════════════════════════════════


def join_messages(errs: Iterable[BaseException | None]) -> str:
    """Join the non-empty messages of errs with ``"; "``."""
    return "; ".join(msg for err in errs if err is not None and (msg := str(err)))


def join_errors(*errs: BaseException | None) -> Error | None:
    """Join error messages with ``"; "`` into one new error, None when there is nothing to join.

    Example:
        >>> str(join_errors(new("first error"), None, new("second error")))
        'first error; second error'
    """
    joined = join_messages(errs)
    return new(joined) if joined else None
