"""Ordered error collectors.

List keeps every added error in order, duplicates included. SafeList guards the same
operations with a lock for use from several threads.

Example:
    >>> errs = List()
    >>> for row in rows:
    ...     if not row.valid:
    ...         errs.new("invalid row", "line", row.line)
    >>> if err := errs.err():
    ...     raise err   # "invalid row line=3; invalid row line=9"
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from errm.foundation.errors import errorf, is_, join_messages, new, wrap, wrapf


class List:
    """Ordered collection of errors rendered as one ``"; "``-joined error.

    Not safe for concurrent use; see SafeList.
    """

    __slots__ = ("_errs",)

    def __init__(self) -> None:
        self._errs: list[BaseException] = []

    def add(self, err: BaseException | None) -> None:
        """Append err. No-op for None."""
        if err is None:
            return
        self._errs.append(err)

    def new(self, msg: str, *fields: object) -> None:
        self._errs.append(new(msg, *fields))

    def errorf(self, msg: str, *args: object) -> None:
        self._errs.append(errorf(msg, *args))

    def wrap(self, err: BaseException | None, msg: str, *fields: object) -> None:
        self._errs.append(wrap(err, msg, *fields))

    def wrapf(self, err: BaseException | None, msg: str, *args: object) -> None:
        self._errs.append(wrapf(err, msg, *args))

    def has(self, target: BaseException | None, *targets: BaseException | None) -> bool:
        """Report whether any collected error is, or wraps, target or one of targets."""
        candidates = (target, *targets)
        return any(is_(err, t) for err in self._errs for t in candidates)

    def err(self) -> ListError | None:
        """Return a live error view of the collected errors, None when empty."""
        return ListError(self) if self._errs else None

    def empty(self) -> bool:
        return not self._errs

    def not_empty(self) -> bool:
        return bool(self._errs)

    def clear(self) -> None:
        self._errs = []

    def __len__(self) -> int:
        return len(self._errs)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(list(self._errs))

    def __repr__(self) -> str:
        return f"List({self._errs!r})"


class ListError(Exception):
    """Error view over a List.

    The message is recomputed from the list on every ``str()``, so errors added
    after ``err()`` show up in the same view.
    """

    def __init__(self, source: List) -> None:
        super().__init__()
        self.source = source

    def __str__(self) -> str:
        return join_messages(self.source)

    def __repr__(self) -> str:
        return f"ListError({str(self)!r})"

    def has(self, target: BaseException | None, *targets: BaseException | None) -> bool:
        return self.source.has(target, *targets)

    def errors(self) -> list[BaseException]:
        """Snapshot of the errors currently in the source list."""
        return list(self.source)


class SafeList:
    """List guarded by a lock, safe for concurrent use.

    ``err()`` returns a view over the inner list; reading that view later does not
    take the lock, so stop adding errors before rendering it.
    """

    __slots__ = ("_list", "_lock")

    def __init__(self) -> None:
        self._list = List()
        self._lock = threading.Lock()

    def add(self, err: BaseException | None) -> None:
        with self._lock:
            self._list.add(err)

    def new(self, msg: str, *fields: object) -> None:
        with self._lock:
            self._list.new(msg, *fields)

    def errorf(self, msg: str, *args: object) -> None:
        with self._lock:
            self._list.errorf(msg, *args)

    def wrap(self, err: BaseException | None, msg: str, *fields: object) -> None:
        with self._lock:
            self._list.wrap(err, msg, *fields)

    def wrapf(self, err: BaseException | None, msg: str, *args: object) -> None:
        with self._lock:
            self._list.wrapf(err, msg, *args)

    def has(self, target: BaseException | None, *targets: BaseException | None) -> bool:
        with self._lock:
            return self._list.has(target, *targets)

    def err(self) -> ListError | None:
        with self._lock:
            return self._list.err()

    def empty(self) -> bool:
        with self._lock:
            return self._list.empty()

    def not_empty(self) -> bool:
        with self._lock:
            return self._list.not_empty()

    def clear(self) -> None:
        with self._lock:
            self._list.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._list)

    def __iter__(self) -> Iterator[BaseException]:
        with self._lock:
            return iter(self._list)

    def __repr__(self) -> str:
        with self._lock:
            return f"SafeList({self._list._errs!r})"


__all__ = ["List", "ListError", "SafeList"]
