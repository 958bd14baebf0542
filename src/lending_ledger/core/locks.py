"""
Mutual exclusion for ledger transitions.

Each borrow, return, or snapshot of an item runs under the lock the
registry hands out for that item. With the ``item`` scope, independent items
proceed in parallel; with the ``global`` scope every item shares one lock.
"""

import threading
from enum import Enum


class LockScope(str, Enum):
    """Granularity of ledger locking."""

    ITEM = "item"
    GLOBAL = "global"


class LockRegistry:
    """Hands out one reentrant lock per item identifier."""

    def __init__(self, scope: LockScope | str = LockScope.ITEM):
        self.scope = LockScope(scope)
        self._guard = threading.Lock()
        self._global = threading.RLock()
        self._locks: dict[str, threading.RLock] = {}

    def for_item(self, item_id: str) -> threading.RLock:
        """Return the lock guarding ``item_id``'s state."""
        if self.scope == LockScope.GLOBAL:
            return self._global

        with self._guard:
            lock = self._locks.get(item_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[item_id] = lock
            return lock
