"""
Append-only loan history.

Loan records are grouped by item display name and kept in insertion order,
which is chronological. Records are appended on borrow and finalized on
return; nothing is ever removed, compacted, or reordered.

Items sharing a display name (different authors) share one sequence. The
return scan also matches on principal and, when given, on item identifier, so
their loans never finalize each other's records.
"""

import threading
from datetime import datetime

from ..errors import InternalConsistencyError
from ..models.loan import LoanRecord


class HistoryLedger:
    """Per-item-name sequences of LoanRecords."""

    def __init__(self):
        self._records: dict[str, list[LoanRecord]] = {}
        self._lock = threading.RLock()

    def append(self, item_name: str, record: LoanRecord) -> None:
        with self._lock:
            self._records.setdefault(item_name, []).append(record)

    def find_latest_open(
        self, item_name: str, principal: str, item_id: str | None = None
    ) -> LoanRecord | None:
        """
        Find the newest unfinalized record held by ``principal``.

        Scans from the newest entry back to the oldest and stops at the
        first match.
        """
        with self._lock:
            for record in reversed(self._records.get(item_name, [])):
                if not record.is_open or record.principal != principal:
                    continue
                if item_id is None or record.item_id in (None, item_id):
                    return record
            return None

    def finalize_latest_open(
        self,
        item_name: str,
        principal: str,
        ended_at: datetime,
        item_id: str | None = None,
    ) -> LoanRecord:
        """
        Set the end time on the newest open record for ``principal``.

        Returns:
            The finalized record

        Raises:
            InternalConsistencyError: If the principal has no open record
        """
        with self._lock:
            record = self.find_latest_open(item_name, principal, item_id)
            if record is None:
                raise InternalConsistencyError(
                    f"No open loan record for '{principal}' on '{item_name}'"
                )
            record.close(ended_at)
            return record.model_copy()

    def history_for(self, item_name: str) -> list[LoanRecord]:
        """Full history for ``item_name``, oldest first; empty if unknown."""
        with self._lock:
            return [record.model_copy() for record in self._records.get(item_name, [])]

    def open_loans(self, item_name: str) -> list[LoanRecord]:
        """Records for ``item_name`` that are still active."""
        with self._lock:
            return [r.model_copy() for r in self._records.get(item_name, []) if r.is_open]
