"""
Notification models emitted after a ledger operation commits.

Subscribers receive one of these per successful mutation. They are plain
pydantic models so any transport (MCP notification, journal row, message
queue) can serialize them with ``model_dump(mode="json")``.
"""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .item import Item


class LedgerEvent(BaseModel):
    """Common fields for every ledger notification."""

    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the operation committed",
    )

    model_config = ConfigDict(frozen=True)


class ItemAdded(LedgerEvent):
    """An admin added a new item to the catalog."""

    kind: Literal["item_added"] = "item_added"
    item: Item


class ItemBorrowed(LedgerEvent):
    """A principal borrowed a copy of an item."""

    kind: Literal["item_borrowed"] = "item_borrowed"
    principal: str
    item_id: str
    item_name: str


class ItemReturned(LedgerEvent):
    """A principal returned its copy of an item."""

    kind: Literal["item_returned"] = "item_returned"
    principal: str
    item_id: str
    item_name: str


LedgerNotification = ItemAdded | ItemBorrowed | ItemReturned
