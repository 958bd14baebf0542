"""Lending Ledger MCP tools (operations with side effects)."""

from .ledger import (
    add_item_handler,
    borrow_item_handler,
    return_item_handler,
    transfer_admin_handler,
)

__all__ = [
    "add_item_handler",
    "borrow_item_handler",
    "return_item_handler",
    "transfer_admin_handler",
]
