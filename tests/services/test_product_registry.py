"""Tests for ProductRegistry: id assignment, lookups, field updates, guarded delete."""

import pytest

from stock_kernel.domain.dtos import ProductInfo
from stock_kernel.exceptions import (
    CascadeContractError,
    InvalidProductFieldError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from stock_kernel.selectors.movement_selector import MovementSelector
from stock_kernel.services.bulk_loader import BulkProductLoader
from stock_kernel.services.product_registry import ProductRegistry


class TestCreate:

    def test_first_product_gets_id_1(self, registry):
        assert registry.create("Widget", "Tools", "9.99", 10) == 1

    def test_ids_follow_max_plus_one(self, registry, session):
        registry.create("A", "Cat", "1", 0)
        registry.create("B", "Cat", "1", 0)
        session.commit()

        assert registry.next_id() == 3

    def test_ids_follow_max_not_count(self, session):
        BulkProductLoader(session).insert_products(
            [ProductInfo(id=40, name="Bolt", category="Hardware", price="0.10", stock=100)]
        )

        assert ProductRegistry(session).create("Nut", "Hardware", "0.05", 50) == 41

    def test_initial_stock_is_not_a_movement(self, registry, session):
        pid = registry.create("Widget", "Tools", "9.99", 10)
        session.commit()

        assert MovementSelector(session).query_by_product(pid) == []
        assert registry.find_by_id(pid).stock == 10

    def test_negative_initial_stock_rejected(self, registry):
        with pytest.raises(InvalidQuantityError):
            registry.create("Widget", "Tools", "9.99", -1)

    @pytest.mark.parametrize("name, category", [("", "Tools"), ("Widget", "   ")])
    def test_empty_text_rejected(self, registry, name, category):
        with pytest.raises(InvalidProductFieldError):
            registry.create(name, category, "1", 0)

    def test_price_kept_verbatim(self, registry):
        pid = registry.create("Widget", "Tools", "12,50 EUR", 1)
        assert registry.find_by_id(pid).price == "12,50 EUR"

    def test_creation_logged(self, registry, captured_logs):
        pid = registry.create("Widget", "Tools", "9.99", 10)

        created = [r for r in captured_logs() if r["message"] == "product_created"]
        assert created[0]["product_id"] == pid
        assert created[0]["initial_stock"] == 10


class TestLookup:

    def test_find_by_name(self, registry):
        pid = registry.create("Widget", "Tools", "9.99", 10)

        product = registry.find_by_name("Widget")

        assert product.id == pid
        assert product.category == "Tools"

    def test_find_by_name_missing(self, registry):
        with pytest.raises(ProductNotFoundError) as exc_info:
            registry.find_by_name("Nope")
        assert exc_info.value.name == "Nope"

    def test_duplicate_names_resolve_to_lowest_id(self, registry):
        first = registry.create("Widget", "Tools", "1", 1)
        registry.create("Widget", "Toys", "2", 2)

        assert registry.find_by_name("Widget").id == first

    def test_find_by_id_missing(self, registry):
        with pytest.raises(ProductNotFoundError) as exc_info:
            registry.find_by_id(5)
        assert exc_info.value.product_id == 5

    def test_list_all_ordered_by_id(self, registry):
        registry.create("B", "Cat", "1", 0)
        registry.create("A", "Cat", "1", 0)

        assert [p.name for p in registry.list_all()] == ["B", "A"]

    def test_list_all_empty(self, registry):
        assert registry.list_all() == []


class TestUpdateFields:

    def test_updates_metadata_only(self, registry):
        pid = registry.create("Widget", "Tools", "9.99", 10)

        registry.update_fields(pid, "Gadget", "Toys", "5.00")

        product = registry.find_by_id(pid)
        assert (product.name, product.category, product.price, product.stock) == (
            "Gadget", "Toys", "5.00", 10,
        )

    def test_missing_product(self, registry):
        with pytest.raises(ProductNotFoundError):
            registry.update_fields(99, "A", "B", "C")


class TestDeleteGuard:

    def test_direct_delete_is_refused(self, registry):
        pid = registry.create("Widget", "Tools", "9.99", 10)

        with pytest.raises(CascadeContractError):
            registry.delete(pid)

        assert registry.find_by_id(pid).id == pid

    def test_delete_with_foreign_guard_is_refused(self, registry):
        pid = registry.create("Widget", "Tools", "9.99", 10)

        with pytest.raises(CascadeContractError):
            registry.delete(pid, guard=object())
