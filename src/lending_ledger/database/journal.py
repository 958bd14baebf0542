"""
Event journal: a notification subscriber backed by SQLAlchemy.

Attach an EventJournal to a LendingLedger and every committed ItemAdded,
ItemBorrowed and ItemReturned is written as one ``ledger_events`` row.
Entries can be listed back for auditing, filtered by kind or item.
"""

import logging
import threading
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import select

from ..models.events import ItemAdded, LedgerNotification
from .schema import LedgerEventRow
from .session import DatabaseManager

logger = logging.getLogger(__name__)


class JournalEntry(BaseModel):
    """One journal row as read back from the database."""

    id: int
    kind: str
    principal: str | None
    item_id: str
    item_name: str
    payload: dict[str, Any]
    occurred_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("occurred_at")
    @classmethod
    def attach_utc(cls, v: datetime) -> datetime:
        # SQLite drops the offset; rows are always written in UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class EventJournal:
    """Persists ledger notifications, one row per event."""

    def __init__(self, manager: DatabaseManager):
        self.manager = manager
        # SQLite journals share one connection across threads
        self._write_lock = threading.Lock()

    def __call__(self, event: LedgerNotification) -> None:
        self.record(event)

    def record(self, event: LedgerNotification) -> None:
        """Write ``event`` to the journal."""
        if isinstance(event, ItemAdded):
            principal = None
            item_id, item_name = event.item.item_id, event.item.name
        else:
            principal = event.principal
            item_id, item_name = event.item_id, event.item_name

        occurred_at = event.occurred_at
        if occurred_at.tzinfo is not None:
            occurred_at = occurred_at.astimezone(UTC)

        row = LedgerEventRow(
            kind=event.kind,
            principal=principal,
            item_id=item_id,
            item_name=item_name,
            payload=event.model_dump(mode="json"),
            occurred_at=occurred_at,
        )
        with self._write_lock, self.manager.session_scope() as session:
            session.add(row)
        logger.debug("Journaled %s for %s", event.kind, item_id)

    def entries(self, kind: str | None = None, item_id: str | None = None) -> list[JournalEntry]:
        """
        List journal entries in delivery order.

        Args:
            kind: Only entries of this event kind
            item_id: Only entries for this item
        """
        query = select(LedgerEventRow).order_by(LedgerEventRow.id)
        if kind is not None:
            query = query.where(LedgerEventRow.kind == kind)
        if item_id is not None:
            query = query.where(LedgerEventRow.item_id == item_id)

        with self._write_lock, self.manager.session_scope() as session:
            rows = session.execute(query).scalars().all()
            return [JournalEntry.model_validate(row) for row in rows]
