"""
SQLAlchemy schema for the ledger event journal.

The journal is an audit collaborator: every committed notification becomes
one row. The ledger never reads these rows back to rebuild its state.
"""

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Index, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

EVENT_KINDS = ("item_added", "item_borrowed", "item_returned")


class LedgerEventRow(Base):
    """
    Ledger events table.

    One row per ItemAdded / ItemBorrowed / ItemReturned notification, in the
    order they were delivered.
    """

    __tablename__ = "ledger_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String(32), nullable=False)
    principal = Column(String(200), nullable=True)
    item_id = Column(String(500), nullable=False)
    item_name = Column(String(500), nullable=False)
    payload = Column(JSON, nullable=False)
    occurred_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_ledger_event_item", "item_id"),
        Index("idx_ledger_event_kind", "kind"),
        CheckConstraint(
            "kind IN (" + ", ".join(f"'{kind}'" for kind in EVENT_KINDS) + ")",
            name="check_ledger_event_kind",
        ),
    )

    def __repr__(self) -> str:
        return f"<LedgerEventRow(id={self.id}, kind='{self.kind}', item_id='{self.item_id}')>"
