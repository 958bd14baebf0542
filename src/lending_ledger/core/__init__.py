"""
Lending ledger core.

The components that hold the ledger's invariants:
- AccessGate: the single administrative principal
- Catalog: items and their copy counters
- BorrowerIndex: who holds what right now
- HistoryLedger: the append-only loan audit trail
- LendingStateMachine: borrow/return transitions over all of the above
- LockRegistry: per-item mutual exclusion
"""

from .access import AccessGate
from .borrowers import BorrowerIndex
from .catalog import Catalog
from .history import HistoryLedger
from .lending import LendingStateMachine
from .locks import LockRegistry, LockScope

__all__ = [
    "AccessGate",
    "BorrowerIndex",
    "Catalog",
    "HistoryLedger",
    "LendingStateMachine",
    "LockRegistry",
    "LockScope",
]
