"""
Concurrency tests: independent callers hammering the same ledger.

Each operation must commit as an indivisible unit, so the counters, the
borrower index and the open loan records always agree, and no item is ever
lent beyond its copies.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from lending_ledger.errors import AlreadyBorrowingError, ItemUnavailableError, NotBorrowingError
from lending_ledger.service import LendingLedger

ADMIN = "admin"

pytestmark = pytest.mark.concurrency


@pytest.fixture(params=["item", "global"])
def threaded_ledger(request) -> LendingLedger:
    return LendingLedger(admin_principal=ADMIN, lock_scope=request.param)


def test_borrowers_never_exceed_copies(threaded_ledger):
    item_id = threaded_ledger.add_item(ADMIN, "Dune", 6, "Herbert")
    barrier = threading.Barrier(20)
    outcomes: list[str] = []
    outcomes_lock = threading.Lock()

    def attempt(n: int) -> None:
        barrier.wait()
        try:
            threaded_ledger.borrow(f"principal-{n}", item_id)
            result = "ok"
        except ItemUnavailableError:
            result = "unavailable"
        with outcomes_lock:
            outcomes.append(result)

    with ThreadPoolExecutor(max_workers=20) as pool:
        list(pool.map(attempt, range(20)))

    assert outcomes.count("ok") == 6
    assert outcomes.count("unavailable") == 14
    item = threaded_ledger.get_item(item_id)
    assert item.active_loans == 6
    assert len(threaded_ledger.holders(item_id)) == 6
    assert len(threaded_ledger.history_for("Dune")) == 6


def test_same_principal_races_itself(threaded_ledger):
    item_id = threaded_ledger.add_item(ADMIN, "Dune", 6, "Herbert")
    barrier = threading.Barrier(10)
    successes = []

    def attempt(_: int) -> None:
        barrier.wait()
        try:
            threaded_ledger.borrow("alice", item_id)
            successes.append(True)
        except AlreadyBorrowingError:
            pass

    with ThreadPoolExecutor(max_workers=10) as pool:
        list(pool.map(attempt, range(10)))

    assert successes == [True]
    assert threaded_ledger.get_item(item_id).active_loans == 1


def test_mixed_traffic_keeps_state_consistent(threaded_ledger):
    items = [
        threaded_ledger.add_item(ADMIN, name, copies, author)
        for name, copies, author in [("Dune", 3, "Herbert"), ("Solaris", 1, "Lem"), ("Ubik", 2, "Dick")]
    ]

    def churn(n: int) -> None:
        principal = f"principal-{n % 8}"
        for round_ in range(50):
            item_id = items[(n + round_) % len(items)]
            try:
                if round_ % 2:
                    threaded_ledger.return_item(principal, item_id)
                else:
                    threaded_ledger.borrow(principal, item_id)
            except (AlreadyBorrowingError, ItemUnavailableError, NotBorrowingError):
                pass

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(churn, range(16)))

    for item_id in items:
        item = threaded_ledger.get_item(item_id)
        assert 0 <= item.active_loans <= item.total_copies
        assert len(threaded_ledger.holders(item_id)) == item.active_loans
        assert len(threaded_ledger.history.open_loans(item.name)) == item.active_loans


def test_concurrent_duplicate_adds(threaded_ledger):
    barrier = threading.Barrier(8)
    created = []

    def attempt(_: int) -> None:
        barrier.wait()
        try:
            created.append(threaded_ledger.add_item(ADMIN, "Dune", 6, "Herbert"))
        except Exception as e:  # noqa: BLE001
            created.append(type(e).__name__)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(attempt, range(8)))

    assert created.count("DuplicateItemError") == 7
    assert len(threaded_ledger.catalog) == 1
