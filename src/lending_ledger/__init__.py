"""
Lending Ledger Package.

A lending-inventory ledger: a catalog of items with finite copies, the
principals currently holding them, and an append-only loan history, with
catalog mutation restricted to a single administrative principal.

Key Components:
- core: access gate, catalog, borrower index, history ledger, state machine
- service: the LendingLedger service object and its operation surface
- models: Pydantic models for items, loan records and notifications
- errors: the ledger's error taxonomy
- config: Configuration management with pydantic-settings
- database: SQLAlchemy event journal
- tools / resources / server: the MCP surface
"""

__version__ = "0.1.0"

from .errors import LedgerError
from .service import LendingLedger, build_ledger

__all__ = [
    "LedgerError",
    "LendingLedger",
    "__version__",
    "build_ledger",
]
