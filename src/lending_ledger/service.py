"""
The lending ledger service.

LendingLedger is the one object that owns the ledger's state: it wires the
access gate, catalog, borrower index, history ledger and state machine
together and exposes the operation surface callers use. Principals are
opaque strings supplied by whatever authenticates the caller.

Mutations publish their notification only after they have committed and
released the item lock. Read queries never mutate and return snapshots.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from .config import LedgerConfig
from .core.access import AccessGate
from .core.borrowers import BorrowerIndex
from .core.catalog import Catalog
from .core.history import HistoryLedger
from .core.lending import LendingStateMachine, utc_now
from .core.locks import LockRegistry, LockScope
from .errors import InternalConsistencyError
from .models.events import ItemAdded
from .models.item import IdentifierScheme, Item
from .models.loan import LoanRecord
from .notifications import NotificationBus, Subscriber
from .observability import trace_operation

logger = logging.getLogger(__name__)


class LendingLedger:
    """Explicit service object holding all ledger state."""

    def __init__(
        self,
        admin_principal: str,
        identifier_scheme: IdentifierScheme | str = IdentifierScheme.HASHED,
        lock_scope: LockScope | str = LockScope.ITEM,
        clock: Callable[[], datetime] = utc_now,
        bus: NotificationBus | None = None,
    ):
        self.gate = AccessGate(admin_principal)
        self.locks = LockRegistry(lock_scope)
        self.catalog = Catalog(self.locks, identifier_scheme)
        self.borrowers = BorrowerIndex()
        self.history = HistoryLedger()
        self.lending = LendingStateMachine(self.catalog, self.borrowers, self.history, clock)
        self.bus = bus or NotificationBus()
        self.clock = clock

    # === Admin operations ===

    @trace_operation("add_item")
    def add_item(self, caller: str, name: str, copies: int | str, author: str) -> str:
        """
        Add a new item to the catalog.

        Returns:
            The new item's identifier

        Raises:
            UnauthorizedError: If the caller is not the admin
            LedgerValidationError: If name/author is empty or copies is invalid
            DuplicateItemError: If the item already exists
        """
        with self.gate.authorized(caller):
            item = self.catalog.add_item(name, copies, author)
        self.bus.publish(ItemAdded(item=item, occurred_at=self.clock()))
        return item.item_id

    @trace_operation("transfer_admin")
    def transfer_admin(self, caller: str, new_principal: str) -> None:
        self.gate.transfer(caller, new_principal)

    @property
    def admin_principal(self) -> str:
        return self.gate.principal

    # === Lending operations ===

    @trace_operation("borrow")
    def borrow(self, caller: str, item_id: str) -> None:
        event = self._guarded(self.lending.borrow, caller, item_id)
        self.bus.publish(event)

    @trace_operation("return_item")
    def return_item(self, caller: str, item_id: str) -> None:
        event = self._guarded(self.lending.return_item, caller, item_id)
        self.bus.publish(event)

    def _guarded(self, transition, caller: str, item_id: str):
        try:
            return transition(caller, item_id)
        except InternalConsistencyError:
            logger.error("Ledger invariant broken during %s", transition.__name__)
            raise

    # === Read queries ===

    def list_available(self) -> list[Item]:
        """Items with a free copy, in the order they were added."""
        return self.catalog.list_available()

    def history_for(self, item_name: str) -> list[LoanRecord]:
        """Loan records for ``item_name``, oldest first."""
        return self.history.history_for(item_name)

    def get_item(self, item_id: str) -> Item:
        """
        Snapshot of one item.

        Raises:
            ItemNotFoundError: If no such item exists
        """
        return self.catalog.snapshot(item_id)

    def is_borrowing(self, item_id: str, principal: str) -> bool:
        return self.borrowers.is_holder(item_id, principal)

    def holders(self, item_id: str) -> list[str]:
        return self.borrowers.holders(item_id)

    # === Notifications ===

    def subscribe(self, subscriber: Subscriber) -> None:
        self.bus.subscribe(subscriber)


def build_ledger(config: LedgerConfig) -> LendingLedger:
    """
    Construct the ledger described by ``config``.

    Attaches the SQL event journal as a subscriber when it is enabled.
    """
    ledger = LendingLedger(
        admin_principal=config.admin_principal,
        identifier_scheme=config.identifier_scheme,
        lock_scope=config.lock_scope,
    )

    if config.journal_enabled:
        # Imported lazily so the in-memory ledger does not touch the database
        from .database.journal import EventJournal
        from .database.session import DatabaseManager

        manager = DatabaseManager(config.get_database_url())
        manager.init_database()
        ledger.subscribe(EventJournal(manager))
        logger.info("Event journal attached at %s", config.database_path)

    logger.info(
        "Ledger ready (admin=%s, identifiers=%s, locking=%s)",
        config.admin_principal,
        config.identifier_scheme,
        config.lock_scope,
    )
    return ledger
