"""Lending Ledger MCP resources (read-only endpoints)."""

from .ledger import (
    AvailableItemsResponse,
    HistoryResponse,
    history_handler,
    list_available_handler,
)

__all__ = [
    "AvailableItemsResponse",
    "HistoryResponse",
    "history_handler",
    "list_available_handler",
]
