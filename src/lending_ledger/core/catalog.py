"""
Item catalog.

The catalog maps item identifiers to Item records and is the source of truth
for copy counts and active-loan counters. Items are admitted once through
``add_item`` and never removed; afterwards only the lending state machine
touches them.
"""

import logging
import threading

from ..errors import DuplicateItemError, ItemNotFoundError, LedgerValidationError
from ..models.item import IdentifierScheme, Item, derive_item_id
from .locks import LockRegistry

logger = logging.getLogger(__name__)


class Catalog:
    """Identifier-to-item mapping, kept in insertion order."""

    def __init__(
        self,
        locks: LockRegistry,
        identifier_scheme: IdentifierScheme | str = IdentifierScheme.HASHED,
    ):
        self.locks = locks
        self.identifier_scheme = IdentifierScheme(identifier_scheme)
        self._items: dict[str, Item] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def add_item(self, name: str, copies: int | str, author: str) -> Item:
        """
        Admit a new item.

        Authorization is the caller's responsibility. Zero copies is
        corrected to one rather than rejected.

        Args:
            name: Display name
            copies: Number of copies owned; a string of decimal digits such
                as ``"6"`` is read as that integer
            author: Author

        Returns:
            Snapshot of the created item

        Raises:
            LedgerValidationError: If name or author is empty, or copies is not
                a non-negative integer
            DuplicateItemError: If the derived identifier already exists
        """
        if not name:
            raise LedgerValidationError("Item name must not be empty")
        if not author:
            raise LedgerValidationError("Item author must not be empty")
        if isinstance(copies, str) and copies.strip().isdecimal():
            copies = int(copies)
        if isinstance(copies, bool) or not isinstance(copies, int):
            raise LedgerValidationError(f"Copies must be an integer, got {copies!r}")
        if copies < 0:
            raise LedgerValidationError(f"Copies must not be negative, got {copies}")

        item_id = derive_item_id(name, author, self.identifier_scheme)

        with self._lock:
            if item_id in self._items:
                raise DuplicateItemError(f"Item '{name}' by '{author}' already exists ({item_id})")

            item = Item(
                item_id=item_id,
                name=name,
                author=author,
                total_copies=copies or 1,
                active_loans=0,
            )
            self._items[item_id] = item

        logger.info("Added item %s ('%s' by '%s', %d copies)", item_id, name, author, item.total_copies)
        return item.model_copy()

    def exists(self, item_id: str) -> bool:
        with self._lock:
            return item_id in self._items

    def get(self, item_id: str) -> Item:
        """
        Get the live item record.

        Callers that mutate it must hold the item's lock.

        Raises:
            ItemNotFoundError: If no such item was added
        """
        with self._lock:
            item = self._items.get(item_id)
        if item is None:
            raise ItemNotFoundError(f"Item {item_id} not found")
        return item

    def snapshot(self, item_id: str) -> Item:
        """Consistent copy of one item, taken under its lock."""
        item = self.get(item_id)
        with self.locks.for_item(item_id):
            return item.model_copy()

    def list_available(self) -> list[Item]:
        """
        Items with at least one copy on the shelf, in insertion order.

        Returns a fresh list of copies; later transitions do not show through.
        """
        with self._lock:
            items = list(self._items.values())

        available = []
        for item in items:
            with self.locks.for_item(item.item_id):
                if item.is_available:
                    available.append(item.model_copy())
        return available
