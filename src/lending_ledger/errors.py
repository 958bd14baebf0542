"""
Error taxonomy for the lending ledger.

Every failure the ledger reports is a subclass of LedgerError. Each class
carries a ``code`` naming its taxonomy kind so callers (the MCP tool layer,
an HTTP adapter, a CLI) can surface it verbatim to their own users.

All errors are raised synchronously at the point of violation, before any
state is mutated.
"""


class LedgerError(Exception):
    """Base exception for ledger operations."""

    code = "LedgerError"


class UnauthorizedError(LedgerError):
    """Raised when a non-admin principal attempts an admin operation."""

    code = "Unauthorized"


class LedgerValidationError(LedgerError):
    """Raised when item input (name, author, copies) is malformed."""

    code = "ValidationError"


class DuplicateItemError(LedgerError):
    """Raised when adding an item whose identifier already exists."""

    code = "DuplicateItem"


class ItemNotFoundError(LedgerError):
    """Raised when an item identifier is not in the catalog."""

    code = "ItemNotFound"


class ItemUnavailableError(LedgerError):
    """Raised when every copy of an item is on loan."""

    code = "ItemUnavailable"


class AlreadyBorrowingError(LedgerError):
    """Raised when a principal borrows an item it already holds."""

    code = "AlreadyBorrowing"


class NotBorrowingError(LedgerError):
    """Raised when a principal returns an item it does not hold."""

    code = "NotBorrowing"


class InternalConsistencyError(LedgerError):
    """
    Raised when the ledger's own invariants are found broken.

    This indicates a defect (for example a holder with no open loan record),
    never a user error.
    """

    code = "InternalConsistencyError"


__all__ = [
    "AlreadyBorrowingError",
    "DuplicateItemError",
    "InternalConsistencyError",
    "ItemNotFoundError",
    "ItemUnavailableError",
    "LedgerError",
    "LedgerValidationError",
    "NotBorrowingError",
    "UnauthorizedError",
]
