"""Error collectors that keep one error per rendered message.

Set keys every error by ``str(err)``: adding an error whose message is already
present replaces the stored error but keeps its position. Two different errors
that render the same text therefore collapse into one entry. This costs a
``str()`` call per add and pays off when the same failure repeats many times.

Example:
    >>> errs = Set()
    >>> for host in hosts:
    ...     errs.wrap(ping(host), "host unreachable", "region", host.region)
    >>> str(errs.err())
    'host unreachable region=eu: timeout; host unreachable region=us: timeout'
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from errm.foundation.errors import errorf, is_, join_messages, new, wrap, wrapf


class Set:
    """Collection of errors deduplicated by message, rendered as one ``"; "``-joined error.

    Not safe for concurrent use; see SafeSet.
    """

    __slots__ = ("_errs",)

    def __init__(self) -> None:
        self._errs: dict[str, BaseException] = {}

    def _put(self, err: BaseException) -> None:
        self._errs[str(err)] = err

    def add(self, err: BaseException | None) -> None:
        """Store err under its message, replacing an error with the same message. No-op for None."""
        if err is None:
            return
        self._put(err)

    def new(self, msg: str, *fields: object) -> None:
        self._put(new(msg, *fields))

    def errorf(self, msg: str, *args: object) -> None:
        self._put(errorf(msg, *args))

    def wrap(self, err: BaseException | None, msg: str, *fields: object) -> None:
        self._put(wrap(err, msg, *fields))

    def wrapf(self, err: BaseException | None, msg: str, *args: object) -> None:
        self._put(wrapf(err, msg, *args))

    def has(self, target: BaseException | None, *targets: BaseException | None) -> bool:
        """Report whether any stored error is, or wraps, target or one of targets."""
        candidates = (target, *targets)
        return any(is_(err, t) for err in self._errs.values() for t in candidates)

    def err(self) -> SetError | None:
        """Return a live error view of the stored errors, None when empty."""
        return SetError(self) if self._errs else None

    def empty(self) -> bool:
        return not self._errs

    def clear(self) -> None:
        self._errs = {}

    def __len__(self) -> int:
        return len(self._errs)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(list(self._errs.values()))

    def __contains__(self, msg: object) -> bool:
        return msg in self._errs

    def __repr__(self) -> str:
        return f"Set({list(self._errs.values())!r})"


class SetError(Exception):
    """Error view over a Set. The message is recomputed from the set on every ``str()``."""

    def __init__(self, source: Set) -> None:
        super().__init__()
        self.source = source

    def __str__(self) -> str:
        return join_messages(self.source)

    def __repr__(self) -> str:
        return f"SetError({str(self)!r})"

    def has(self, target: BaseException | None, *targets: BaseException | None) -> bool:
        return self.source.has(target, *targets)

    def errors(self) -> list[BaseException]:
        """Snapshot of the errors currently in the source set."""
        return list(self.source)


class SafeSet:
    """Set guarded by a lock, safe for concurrent use.

    ``err()`` returns a view over the inner set; reading that view later does not
    take the lock.
    """

    __slots__ = ("_set", "_lock")

    def __init__(self) -> None:
        self._set = Set()
        self._lock = threading.Lock()

    def add(self, err: BaseException | None) -> None:
        with self._lock:
            self._set.add(err)

    def new(self, msg: str, *fields: object) -> None:
        with self._lock:
            self._set.new(msg, *fields)

    def errorf(self, msg: str, *args: object) -> None:
        with self._lock:
            self._set.errorf(msg, *args)

    def wrap(self, err: BaseException | None, msg: str, *fields: object) -> None:
        with self._lock:
            self._set.wrap(err, msg, *fields)

    def wrapf(self, err: BaseException | None, msg: str, *args: object) -> None:
        with self._lock:
            self._set.wrapf(err, msg, *args)

    def has(self, target: BaseException | None, *targets: BaseException | None) -> bool:
        with self._lock:
            return self._set.has(target, *targets)

    def err(self) -> SetError | None:
        with self._lock:
            return self._set.err()

    def empty(self) -> bool:
        with self._lock:
            return self._set.empty()

    def clear(self) -> None:
        with self._lock:
            self._set.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._set)

    def __iter__(self) -> Iterator[BaseException]:
        with self._lock:
            return iter(self._set)

    def __contains__(self, msg: object) -> bool:
        with self._lock:
            return msg in self._set

    def __repr__(self) -> str:
        with self._lock:
            return f"SafeSet({list(self._set)!r})"


__all__ = ["SafeSet", "Set", "SetError"]
