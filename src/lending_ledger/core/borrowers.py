"""
Borrower membership index.

The sole source of truth for "is principal X currently borrowing item Y".
Callers serialize access per item through the lock registry; the index
itself only guards its container.
"""

import threading


class BorrowerIndex:
    """Per-item set of principals holding an active loan."""

    def __init__(self):
        self._holders: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    def is_holder(self, item_id: str, principal: str) -> bool:
        with self._lock:
            return principal in self._holders.get(item_id, ())

    def set_holder(self, item_id: str, principal: str, value: bool) -> None:
        """Set or clear membership. Repeating a call has no further effect."""
        with self._lock:
            if value:
                self._holders.setdefault(item_id, set()).add(principal)
                return
            holders = self._holders.get(item_id)
            if holders is not None:
                holders.discard(principal)

    def holders(self, item_id: str) -> list[str]:
        """Sorted snapshot of the principals currently holding ``item_id``."""
        with self._lock:
            return sorted(self._holders.get(item_id, ()))
