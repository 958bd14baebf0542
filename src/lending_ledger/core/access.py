"""
Access gate for administrative operations.

The gate holds the single administrative principal. Catalog mutation and
authority transfer are checked against it; borrowing and returning are open
to any principal and never consult the gate.
"""

import logging
import threading
from collections.abc import Generator
from contextlib import contextmanager

from ..errors import LedgerValidationError, UnauthorizedError

logger = logging.getLogger(__name__)


class AccessGate:
    """Holds the current admin principal and authorizes callers against it."""

    def __init__(self, principal: str):
        if not principal:
            raise LedgerValidationError("Admin principal must not be empty")
        self._principal = principal
        self._lock = threading.RLock()

    @property
    def principal(self) -> str:
        """The current admin principal."""
        with self._lock:
            return self._principal

    def authorize(self, caller: str) -> None:
        """
        Check that ``caller`` is the admin principal.

        Raises:
            UnauthorizedError: If the caller is anyone else
        """
        with self._lock:
            if caller != self._principal:
                raise UnauthorizedError(f"Principal '{caller}' is not the ledger admin")

    @contextmanager
    def authorized(self, caller: str) -> Generator[None, None, None]:
        """
        Authorize ``caller`` and hold the gate for the guarded operation.

        A transfer cannot interleave with an admin operation running inside
        this scope.
        """
        with self._lock:
            self.authorize(caller)
            yield

    def transfer(self, caller: str, new_principal: str) -> None:
        """
        Hand administrative authority to ``new_principal``.

        Past principals are not retained.

        Raises:
            UnauthorizedError: If the caller is not the current admin
            LedgerValidationError: If the successor is empty
        """
        with self.authorized(caller):
            if not new_principal:
                raise LedgerValidationError("New admin principal must not be empty")
            self._principal = new_principal
        logger.info("Admin authority transferred from '%s' to '%s'", caller, new_principal)
