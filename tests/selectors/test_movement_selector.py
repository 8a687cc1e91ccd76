"""Tests for MovementSelector: history, date ranges, per-kind sums, consistency."""

from datetime import datetime, timezone

import pytest

from stock_kernel.exceptions import InvalidDateFormatError, ProductNotFoundError
from stock_kernel.models.movement import MovementKind


def _at(clock, *args):
    clock.set_time(datetime(*args, tzinfo=timezone.utc))


class TestQueryByProduct:

    def test_newest_first(self, ledger, make_product, clock, movement_selector):
        pid = make_product(stock=10)
        ledger.apply_entry(pid, 1)
        clock.advance(60)
        ledger.apply_exit(pid, 2)
        clock.advance(60)
        ledger.apply_entry(pid, 3)

        history = movement_selector.query_by_product(pid)

        assert [(m.kind, m.quantity) for m in history] == [
            (MovementKind.ENTRY, 3),
            (MovementKind.EXIT, 2),
            (MovementKind.ENTRY, 1),
        ]

    def test_equal_timestamps_fall_back_to_id(self, ledger, make_product, movement_selector):
        pid = make_product(stock=10)
        first = ledger.apply_exit(pid, 1)
        second = ledger.apply_exit(pid, 2)

        history = movement_selector.query_by_product(pid)

        assert [m.id for m in history] == [second.id, first.id]

    def test_product_without_movements(self, make_product, movement_selector):
        pid = make_product()
        assert movement_selector.query_by_product(pid) == []

    def test_unknown_product_is_empty_not_error(self, movement_selector):
        assert movement_selector.query_by_product(31337) == []


class TestQueryByDateRange:

    @pytest.fixture
    def spread(self, ledger, make_product, clock):
        """Four movements around the 2024-03-15 .. 2024-03-16 window."""
        widget = make_product(name="Widget", category="Tools", stock=100)
        gadget = make_product(name="Gadget", category="Toys", stock=100)
        _at(clock, 2024, 3, 14, 23, 59, 59)
        ledger.apply_exit(widget, 1)
        _at(clock, 2024, 3, 15, 0, 0, 0)
        ledger.apply_exit(widget, 2)
        _at(clock, 2024, 3, 16, 12, 0, 0)
        ledger.apply_entry(gadget, 3)
        _at(clock, 2024, 3, 17, 0, 0, 0)
        ledger.apply_exit(gadget, 4)
        return widget, gadget

    def test_inclusive_of_both_days(self, spread, movement_selector):
        widget, gadget = spread

        rows = movement_selector.query_by_date_range("2024-03-15", "2024-03-16")

        assert [(r.product_id, r.kind, r.quantity) for r in rows] == [
            (gadget, MovementKind.ENTRY, 3),
            (widget, MovementKind.EXIT, 2),
        ]
        assert rows[0].product_name == "Gadget"
        assert rows[0].category == "Toys"
        assert rows[0].created_at.date().isoformat() == "2024-03-16"

    def test_single_day(self, spread, movement_selector):
        rows = movement_selector.query_by_date_range("2024-03-17", "2024-03-17")
        assert [r.quantity for r in rows] == [4]

    def test_start_after_end_is_empty(self, spread, movement_selector):
        assert movement_selector.query_by_date_range("2024-03-16", "2024-03-15") == []

    def test_no_movements_in_range(self, spread, movement_selector):
        assert movement_selector.query_by_date_range("2023-01-01", "2023-12-31") == []

    @pytest.mark.parametrize(
        "start, end",
        [
            ("2024/03/15", "2024-03-16"),
            ("2024-03-15", "16-03-2024"),
            ("2024-02-30", "2024-03-01"),
            ("2024-13-01", "2024-12-31"),
            ("", "2024-03-16"),
            ("2024-3-5", "2024-03-16"),
        ],
    )
    def test_malformed_dates_rejected(self, movement_selector, start, end):
        with pytest.raises(InvalidDateFormatError):
            movement_selector.query_by_date_range(start, end)


class TestSumsAndConsistency:

    def test_sum_by_kind(self, ledger, make_product, movement_selector):
        pid = make_product(stock=10)
        ledger.apply_entry(pid, 5)
        ledger.apply_entry(pid, 2)
        ledger.apply_exit(pid, 4)

        assert movement_selector.sum_by_product_and_kind(pid, MovementKind.ENTRY) == 7
        assert movement_selector.sum_by_product_and_kind(pid, MovementKind.EXIT) == 4

    def test_sum_with_no_movements_is_zero(self, make_product, movement_selector):
        pid = make_product()
        assert movement_selector.sum_by_product_and_kind(pid, MovementKind.EXIT) == 0

    def test_consistency_holds(self, ledger, make_product, movement_selector):
        pid = make_product(stock=10)
        ledger.apply_entry(pid, 5)
        ledger.apply_exit(pid, 12)
        ledger.reconcile_to(pid, 9)

        assert movement_selector.verify_product_consistency(pid, initial_stock=10)
        assert not movement_selector.verify_product_consistency(pid, initial_stock=0)

    def test_consistency_missing_product(self, movement_selector):
        with pytest.raises(ProductNotFoundError):
            movement_selector.verify_product_consistency(8)
