"""Collectors that turn many errors into one.

- List/SafeList: ordered, keeps duplicates
- Set/SafeSet: one error per rendered message
- ListError/SetError: live ``"; "``-joined error views returned by ``err()``
"""

from .list import List, ListError, SafeList
from .set import SafeSet, Set, SetError

__all__ = ["List", "ListError", "SafeList", "Set", "SetError", "SafeSet"]
