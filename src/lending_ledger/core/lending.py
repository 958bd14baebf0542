"""
Lending state machine.

Each (item, principal) pair cycles NotBorrowing -> Borrowing -> NotBorrowing.
A transition reads the catalog and the borrower index, then commits its
effects on the item, the index, and the history ledger together under the
item's lock. Every admission check runs before the first write, so a
rejected transition leaves no trace.

Transitions return the notification describing what happened; publishing it
is left to the caller, after the lock is released.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..errors import (
    AlreadyBorrowingError,
    InternalConsistencyError,
    ItemUnavailableError,
    NotBorrowingError,
)
from ..models.events import ItemBorrowed, ItemReturned
from ..models.loan import LoanRecord
from .borrowers import BorrowerIndex
from .catalog import Catalog
from .history import HistoryLedger

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class LendingStateMachine:
    """Borrow and return transitions with admission control."""

    def __init__(
        self,
        catalog: Catalog,
        borrowers: BorrowerIndex,
        history: HistoryLedger,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.catalog = catalog
        self.borrowers = borrowers
        self.history = history
        self.clock = clock

    def borrow(self, caller: str, item_id: str) -> ItemBorrowed:
        """
        Lend one copy of ``item_id`` to ``caller``.

        Checks run in order: the item exists, a copy is free, the caller is
        not already holding one.

        Raises:
            ItemNotFoundError: If the item was never added
            ItemUnavailableError: If every copy is on loan
            AlreadyBorrowingError: If the caller already holds a copy
        """
        item = self.catalog.get(item_id)

        with self.catalog.locks.for_item(item_id):
            if item.active_loans >= item.total_copies:
                raise ItemUnavailableError(
                    f"No copies of '{item.name}' available ({item.total_copies} on loan)"
                )
            if self.borrowers.is_holder(item_id, caller):
                raise AlreadyBorrowingError(f"Principal '{caller}' already holds '{item.name}'")

            started_at = self.clock()
            self.borrowers.set_holder(item_id, caller, True)
            item.active_loans += 1
            self.history.append(
                item.name,
                LoanRecord(
                    principal=caller,
                    item_name=item.name,
                    item_id=item_id,
                    started_at=started_at,
                ),
            )
            active_loans = item.active_loans

        logger.info(
            "'%s' borrowed %s ('%s'), %d/%d on loan",
            caller,
            item_id,
            item.name,
            active_loans,
            item.total_copies,
        )
        return ItemBorrowed(
            principal=caller, item_id=item_id, item_name=item.name, occurred_at=started_at
        )

    def return_item(self, caller: str, item_id: str) -> ItemReturned:
        """
        Take back the copy of ``item_id`` held by ``caller``.

        Holder membership is checked before the item lookup, so a caller
        without an active loan is rejected even when the item exists.

        Raises:
            NotBorrowingError: If the caller holds no copy
            InternalConsistencyError: If the caller holds a copy but no open
                loan record exists for it
        """
        if not self.borrowers.is_holder(item_id, caller):
            raise NotBorrowingError(f"Principal '{caller}' is not borrowing {item_id}")

        item = self.catalog.get(item_id)

        with self.catalog.locks.for_item(item_id):
            # Re-check under the lock: a concurrent return may have won
            if not self.borrowers.is_holder(item_id, caller):
                raise NotBorrowingError(f"Principal '{caller}' is not borrowing {item_id}")
            if item.active_loans < 1:
                raise InternalConsistencyError(
                    f"Holder '{caller}' recorded for {item_id} with no active loans"
                )
            if self.history.find_latest_open(item.name, caller, item_id) is None:
                logger.error("No open loan record for '%s' on %s", caller, item_id)
                raise InternalConsistencyError(
                    f"No open loan record for '{caller}' on '{item.name}'"
                )

            ended_at = self.clock()
            self.borrowers.set_holder(item_id, caller, False)
            item.active_loans -= 1
            self.history.finalize_latest_open(item.name, caller, ended_at, item_id)
            active_loans = item.active_loans

        logger.info(
            "'%s' returned %s ('%s'), %d/%d on loan",
            caller,
            item_id,
            item.name,
            active_loans,
            item.total_copies,
        )
        return ItemReturned(
            principal=caller, item_id=item_id, item_name=item.name, occurred_at=ended_at
        )
