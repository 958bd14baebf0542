"""Ledger Resources - read-only views of the catalog and loan history

Resources:
- ledger://items/available - Items with at least one free copy
- ledger://history/{item_name} - Loan records for an item name, oldest first
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..models.item import Item
from ..models.loan import LoanRecord
from ..service import LendingLedger

logger = logging.getLogger(__name__)


class AvailableItemsResponse(BaseModel):
    """Snapshot of the items that can be borrowed right now."""

    items: list[Item] = Field(..., description="Available items in catalog order")
    total: int = Field(..., description="Number of available items")


class HistoryResponse(BaseModel):
    """Loan history for one item name."""

    item_name: str
    records: list[LoanRecord] = Field(..., description="Loan records, oldest first")
    open_loans: int = Field(..., description="Records not yet returned")


async def list_available_handler(ledger: LendingLedger) -> dict[str, Any]:
    """Returns every item with a free copy."""
    try:
        items = ledger.list_available()
        logger.debug("MCP Resource Request - items/available: %d items", len(items))
        return AvailableItemsResponse(items=items, total=len(items)).model_dump(mode="json")
    except Exception as e:
        logger.exception("Error in items/available resource")
        raise ResourceError(f"Failed to list available items: {e!s}") from e


async def history_handler(ledger: LendingLedger, item_name: str) -> dict[str, Any]:
    """Returns the loan history for ``item_name``; unknown names yield no records."""
    try:
        records = ledger.history_for(item_name)
        logger.debug("MCP Resource Request - history/%s: %d records", item_name, len(records))
        return HistoryResponse(
            item_name=item_name,
            records=records,
            open_loans=sum(1 for record in records if record.is_open),
        ).model_dump(mode="json")
    except Exception as e:
        logger.exception("Error in history/{item_name} resource")
        raise ResourceError(f"Failed to retrieve history: {e!s}") from e
