"""
Lending Ledger Models.

Pydantic models for the ledger's entities:
- Item: catalog entries with copy counts
- LoanRecord: borrow-to-return audit entries
- ItemAdded / ItemBorrowed / ItemReturned: post-commit notifications
"""

from .events import ItemAdded, ItemBorrowed, ItemReturned, LedgerEvent, LedgerNotification
from .item import IdentifierScheme, Item, derive_item_id
from .loan import LoanRecord

__all__ = [
    "IdentifierScheme",
    "Item",
    "ItemAdded",
    "ItemBorrowed",
    "ItemReturned",
    "LedgerEvent",
    "LedgerNotification",
    "LoanRecord",
    "derive_item_id",
]
