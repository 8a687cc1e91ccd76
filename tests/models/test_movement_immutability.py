"""
Movement rows are append-only, and table constraints back up the engine.

ORM listeners reject UPDATE and per-row DELETE of movements; CHECK
constraints reject negative stock, non-positive quantities and unknown
kinds even when the services are bypassed.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from stock_kernel.exceptions import ImmutabilityViolationError
from stock_kernel.models.movement import Movement
from stock_kernel.models.product import Product

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def movement_id(ledger, make_product):
    pid = make_product(stock=10)
    return ledger.apply_exit(pid, 2).id


class TestMovementImmutability:

    def test_update_blocked(self, session, movement_id):
        movement = session.get(Movement, movement_id)
        movement.quantity = 1

        with pytest.raises(ImmutabilityViolationError) as exc_info:
            session.flush()

        assert exc_info.value.entity_type == "Movement"
        assert exc_info.value.entity_id == str(movement_id)

    def test_orm_delete_blocked(self, session, movement_id):
        session.delete(session.get(Movement, movement_id))

        with pytest.raises(ImmutabilityViolationError):
            session.flush()

    def test_violation_logged(self, session, movement_id, captured_logs):
        session.get(Movement, movement_id).kind = "entry"

        with pytest.raises(ImmutabilityViolationError):
            session.flush()

        blocked = [r for r in captured_logs() if r["message"] == "immutability_violation_blocked"]
        assert blocked[0]["operation"] == "UPDATE"

    def test_cascade_still_removes_movements(self, ledger, session, movement_id):
        product_id = session.get(Movement, movement_id).product_id
        session.rollback()

        ledger.delete_product_cascade(product_id)

        assert session.execute(select(Movement)).first() is None


class TestTableConstraints:

    def test_negative_stock_rejected_by_check(self, session):
        session.add(Product(id=1, name="Bad", category="Cat", price="1", stock=-1))
        with pytest.raises(IntegrityError):
            session.flush()

    def test_zero_quantity_rejected_by_check(self, session, make_product):
        pid = make_product()
        session.add(Movement(product_id=pid, kind="exit", quantity=0, created_at=NOW))
        with pytest.raises(IntegrityError):
            session.flush()

    def test_unknown_kind_rejected_by_check(self, session, make_product):
        pid = make_product()
        session.add(Movement(product_id=pid, kind="transfer", quantity=1, created_at=NOW))
        with pytest.raises(IntegrityError):
            session.flush()

    def test_movement_requires_existing_product(self, session):
        session.add(Movement(product_id=999, kind="entry", quantity=1, created_at=NOW))
        with pytest.raises(IntegrityError):
            session.flush()
