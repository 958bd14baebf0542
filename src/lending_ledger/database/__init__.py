"""
Event journal persistence for the Lending Ledger.

- schema: SQLAlchemy table for journaled notifications
- session: engine and session management
- journal: the EventJournal subscriber
"""

from .journal import EventJournal, JournalEntry
from .schema import Base, LedgerEventRow
from .session import DatabaseManager

__all__ = [
    "Base",
    "DatabaseManager",
    "EventJournal",
    "JournalEntry",
    "LedgerEventRow",
]
