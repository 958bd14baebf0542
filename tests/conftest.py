"""Test configuration and fixtures for the Lending Ledger.

Provides:
1. Isolated configuration - each test gets fresh settings
2. A deterministic clock - loan timestamps advance predictably
3. Ledger fixtures - an empty ledger, a recorder subscriber, a stocked item
4. Journal fixtures - a per-test SQLite event journal
"""

import os
import threading
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import logfire
import pytest

from lending_ledger.config import LedgerConfig, reset_config
from lending_ledger.database import DatabaseManager, EventJournal
from lending_ledger.models import LedgerNotification
from lending_ledger.service import LendingLedger

ADMIN = "admin"

# === Pytest Configuration ===


def pytest_configure(config):
    """Register markers and keep logfire local."""
    config.addinivalue_line("markers", "concurrency: tests that drive the ledger from threads")
    logfire.configure(send_to_logfire=False, console=False)


# === Clock Fixtures ===


class FakeClock:
    """Clock that advances one minute every time it is read."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 5, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# === Notification Fixtures ===


class EventRecorder:
    """Subscriber that keeps every event it receives, in order."""

    def __init__(self):
        self.events: list[LedgerNotification] = []
        self._lock = threading.Lock()

    def __call__(self, event: LedgerNotification) -> None:
        with self._lock:
            self.events.append(event)

    def kinds(self) -> list[str]:
        with self._lock:
            return [event.kind for event in self.events]


@pytest.fixture
def event_recorder() -> EventRecorder:
    """A recorder not yet attached to anything."""
    return EventRecorder()


# === Ledger Fixtures ===


@pytest.fixture
def ledger(clock: FakeClock) -> LendingLedger:
    """An empty ledger administered by ``admin``."""
    return LendingLedger(admin_principal=ADMIN, clock=clock)


@pytest.fixture
def recorder(ledger: LendingLedger, event_recorder: EventRecorder) -> EventRecorder:
    """Subscriber capturing every notification the ledger publishes."""
    ledger.subscribe(event_recorder)
    return event_recorder


@pytest.fixture
def dune(ledger: LendingLedger) -> str:
    """Six copies of Dune, none on loan."""
    return ledger.add_item(ADMIN, "Dune", 6, "Herbert")


@pytest.fixture
def single_copy(ledger: LendingLedger) -> str:
    """An item with exactly one copy."""
    return ledger.add_item(ADMIN, "Solaris", 1, "Lem")


# === Configuration Fixtures ===


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run without any LENDING_LEDGER_* variables set."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("LENDING_LEDGER_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_config(tmp_path: Path, clean_env) -> Generator[LedgerConfig, None, None]:
    """Configuration pointing the journal at a temporary database."""
    reset_config()

    config = LedgerConfig(
        server_name="test-lending-ledger",
        server_version="0.0.1-test",
        admin_principal=ADMIN,
        database_path=tmp_path / "journal.db",
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()


# === Journal Fixtures ===


@pytest.fixture
def db_manager(tmp_path: Path) -> Generator[DatabaseManager, None, None]:
    """A migrated SQLite journal database, disposed after the test."""
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'journal.db'}")
    manager.init_database()
    yield manager
    manager.close()


@pytest.fixture
def journal(db_manager: DatabaseManager) -> EventJournal:
    return EventJournal(db_manager)
