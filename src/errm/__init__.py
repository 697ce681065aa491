"""errm - errors with inline fields, captured stacks and collectors.

Build errors that carry a message, ``key=value`` fields and the stack where they
were created, check them against their causes, and collect many of them into one.

Quick Start:
    >>> import errm
    >>>
    >>> err = errm.new("user not found", "user_id", 42)
    >>> str(err)
    'user not found user_id=42'
    >>>
    >>> wrapped = errm.wrapf(err, "load profile %s", "alice", "attempt", 2)
    >>> str(wrapped)
    'load profile alice attempt=2: user not found user_id=42'
    >>> errm.is_(wrapped, err)
    True
    >>> print(format(wrapped, "+"))  # message plus stack traces

Collecting Errors:
    >>> errs = errm.List()
    >>> errs.new("first error")
    >>> errs.errorf("second error %d", 2)
    >>> str(errs.err())
    'first error; second error 2'
    >>> errm.Set().err() is None
    True

Logging:
    >>> log = errm.get_logger("billing")
    >>> log.error_with_stack("charge failed", wrapped)
"""

from __future__ import annotations

__version__ = "0.3.0"

# Errors
from .foundation import (
    Error,
    check,
    contains,
    contains_err,
    errorf,
    is_,
    join_errors,
    new,
    stack_for_logger,
    to_json,
    wrap,
    wrapf,
)

# Collectors
from .aggregate import List, ListError, SafeList, SafeSet, Set, SetError

# Ambient
from .config import get_settings
from .logging import configure_logging, get_logger

__all__ = [
    "__version__",
    # Errors
    "Error", "new", "errorf", "wrap", "wrapf",
    "is_", "contains", "contains_err", "check", "to_json", "stack_for_logger", "join_errors",
    # Collectors
    "List", "ListError", "SafeList", "Set", "SetError", "SafeSet",
    # Ambient
    "get_settings", "get_logger", "configure_logging",
]
