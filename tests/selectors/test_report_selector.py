"""Tests for ReportSelector: best sellers, stock per category, low stock."""

import pytest

from stock_kernel.exceptions import InvalidLimitError


class TestTopSellingProducts:

    @pytest.fixture
    def sales(self, ledger, make_product):
        a = make_product(name="A", stock=100)
        b = make_product(name="B", stock=100)
        c = make_product(name="C", stock=100)
        ledger.apply_exit(a, 20)
        ledger.apply_exit(a, 10)
        ledger.apply_exit(b, 10)
        ledger.apply_entry(c, 50)
        return a, b, c

    def test_ranked_by_exit_quantity(self, sales, report_selector):
        a, b, _ = sales

        rows = report_selector.top_selling_products(2)

        assert [(r.product_id, r.total_sold) for r in rows] == [(a, 30), (b, 10)]

    def test_ranking_ignores_creation_order(self, ledger, make_product, report_selector):
        unsold = make_product(name="Unsold", stock=100)
        middle = make_product(name="Middle", stock=100)
        best = make_product(name="Best", stock=100)
        ledger.apply_exit(middle, 10)
        ledger.apply_exit(best, 30)

        rows = report_selector.top_selling_products(2)

        assert [(r.product_id, r.total_sold) for r in rows] == [(best, 30), (middle, 10)]
        assert unsold < middle < best

    def test_unsold_products_included_with_zero(self, sales, report_selector):
        _, _, c = sales

        rows = report_selector.top_selling_products(10)

        assert len(rows) == 3
        assert (rows[-1].product_id, rows[-1].total_sold) == (c, 0)

    def test_entries_do_not_count_as_sales(self, sales, report_selector):
        _, _, c = sales
        totals = {r.product_id: r.total_sold for r in report_selector.top_selling_products(3)}
        assert totals[c] == 0

    def test_ties_broken_by_product_id(self, ledger, make_product, report_selector):
        first = make_product(name="First", stock=10)
        second = make_product(name="Second", stock=10)
        ledger.apply_exit(second, 5)
        ledger.apply_exit(first, 5)

        rows = report_selector.top_selling_products(2)

        assert [r.product_id for r in rows] == [first, second]

    def test_row_carries_product_fields(self, make_product, ledger, report_selector):
        pid = make_product(name="Widget", category="Tools", price="9.99", stock=10)
        ledger.apply_exit(pid, 1)

        (row,) = report_selector.top_selling_products(1)

        assert (row.name, row.category, row.price) == ("Widget", "Tools", "9.99")

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_rejected(self, report_selector, limit):
        with pytest.raises(InvalidLimitError):
            report_selector.top_selling_products(limit)

    def test_empty_inventory(self, report_selector):
        assert report_selector.top_selling_products(5) == []


class TestStockByCategory:

    def test_totals_per_category(self, make_product, report_selector):
        make_product(name="Hammer", category="Tools", stock=10)
        make_product(name="Saw", category="Tools", stock=5)
        make_product(name="Yo-yo", category="Toys", stock=20)

        rows = report_selector.stock_by_category()

        assert [(r.category, r.product_count, r.total_stock) for r in rows] == [
            ("Toys", 1, 20),
            ("Tools", 2, 15),
        ]

    def test_reflects_ledger_changes(self, make_product, ledger, report_selector):
        pid = make_product(category="Tools", stock=10)
        ledger.apply_exit(pid, 10)

        (row,) = report_selector.stock_by_category()

        assert row.total_stock == 0
        assert row.product_count == 1


class TestLowStockProducts:

    def test_strictly_below_threshold(self, make_product, report_selector):
        make_product(name="Low", stock=3)
        make_product(name="Edge", stock=5)
        make_product(name="High", stock=50)

        assert [p.name for p in report_selector.low_stock_products(5)] == ["Low"]
