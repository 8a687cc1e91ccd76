"""
Concurrent exits against one product.

Every worker thread gets its own StockLedgerEngine call (and therefore its
own session) from the shared session factory.  A barrier releases them all
at once so the guarded decrements really contend.

Runs against the suite's store: SQLite by default, PostgreSQL when
DATABASE_URL is set.
"""

from concurrent.futures import ThreadPoolExecutor
from threading import Barrier

import pytest

from stock_kernel.exceptions import InsufficientStockOrNotFoundError
from stock_kernel.models.movement import MovementKind
from stock_kernel.selectors.movement_selector import MovementSelector
from stock_kernel.services.product_registry import ProductRegistry

pytestmark = pytest.mark.slow_locks


def _race(ledger, product_id, quantity, workers):
    """Run ``workers`` simultaneous exits; return (successes, rejections)."""
    barrier = Barrier(workers)

    def _exit():
        barrier.wait()
        try:
            ledger.apply_exit(product_id, quantity)
            return True
        except InsufficientStockOrNotFoundError:
            return False

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda _: _exit(), range(workers)))

    return results.count(True), results.count(False)


class TestConcurrentExits:

    def test_over_requesting_exhausts_to_exactly_zero(self, ledger, make_product, session_factory):
        pid = make_product(stock=10)

        successes, rejections = _race(ledger, pid, quantity=1, workers=20)

        assert successes == 10
        assert rejections == 10
        with session_factory() as s:
            assert ProductRegistry(s).find_by_id(pid).stock == 0
            assert MovementSelector(s).sum_by_product_and_kind(pid, MovementKind.EXIT) == 10

    def test_partial_quantities_never_oversell(self, ledger, make_product, session_factory):
        pid = make_product(stock=10)

        successes, rejections = _race(ledger, pid, quantity=3, workers=8)

        assert successes == 3
        assert rejections == 5
        with session_factory() as s:
            assert ProductRegistry(s).find_by_id(pid).stock == 1
            assert MovementSelector(s).verify_product_consistency(pid, initial_stock=10)

    def test_entries_and_exits_interleaved(self, ledger, make_product, session_factory):
        pid = make_product(stock=5)
        workers = 10
        barrier = Barrier(workers)

        def _work(i):
            barrier.wait()
            if i % 2 == 0:
                ledger.apply_entry(pid, 2)
                return True
            try:
                ledger.apply_exit(pid, 3)
                return True
            except InsufficientStockOrNotFoundError:
                return False

        with ThreadPoolExecutor(max_workers=workers) as pool:
            list(pool.map(_work, range(workers)))

        with session_factory() as s:
            stock = ProductRegistry(s).find_by_id(pid).stock
            assert stock >= 0
            assert MovementSelector(s).verify_product_consistency(pid, initial_stock=5)
