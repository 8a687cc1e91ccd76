"""
Module: stock_kernel.selectors.movement_selector
Responsibility: Read access to the movement log -- per-product history,
    date-range reports and per-kind totals.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - History is returned newest first; equal timestamps fall back to
      descending movement id so the order is deterministic.
    - Date bounds are validated before the store is touched.

Failure modes:
    - InvalidDateFormatError for a malformed or impossible date.
    - ProductNotFoundError from verify_product_consistency.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone

from sqlalchemy import func, select

from stock_kernel.domain.dtos import MovementInfo, MovementReportRow
from stock_kernel.domain.validation import parse_calendar_date
from stock_kernel.exceptions import ProductNotFoundError
from stock_kernel.models.movement import Movement, MovementKind
from stock_kernel.models.product import Product
from stock_kernel.selectors.base import BaseSelector


class MovementSelector(BaseSelector):
    """Queries over stock_movements."""

    def query_by_product(self, product_id: int) -> list[MovementInfo]:
        """All movements of one product, newest first.  Empty if none."""
        movements = self.session.execute(
            select(Movement)
            .where(Movement.product_id == product_id)
            .order_by(Movement.created_at.desc(), Movement.id.desc())
        ).scalars()
        return [MovementInfo.from_model(m) for m in movements]

    def query_by_date_range(self, start: str, end: str) -> list[MovementReportRow]:
        """
        Movements whose UTC calendar date lies in [start, end], newest first.

        Args:
            start: First day, ``YYYY-MM-DD``.
            end: Last day (inclusive), ``YYYY-MM-DD``.

        Returns:
            Rows joined with product name and category.  ``start > end``
            yields an empty list.
        """
        start_day = parse_calendar_date(start)
        end_day = parse_calendar_date(end)
        if start_day > end_day:
            return []

        lower = datetime.combine(start_day, time.min, tzinfo=timezone.utc)
        upper = datetime.combine(end_day + timedelta(days=1), time.min, tzinfo=timezone.utc)

        rows = self.session.execute(
            select(
                Movement.id,
                Movement.product_id,
                Product.name,
                Product.category,
                Movement.kind,
                Movement.quantity,
                Movement.created_at,
            )
            .join(Product, Product.id == Movement.product_id)
            .where(Movement.created_at >= lower, Movement.created_at < upper)
            .order_by(Movement.created_at.desc(), Movement.id.desc())
        ).all()

        return [
            MovementReportRow(
                movement_id=row.id,
                product_id=row.product_id,
                product_name=row.name,
                category=row.category,
                kind=MovementKind(row.kind),
                quantity=row.quantity,
                created_at=row.created_at,
            )
            for row in rows
        ]

    def sum_by_product_and_kind(self, product_id: int, kind: MovementKind) -> int:
        """Total quantity of one kind for one product (0 when none)."""
        total = self.session.execute(
            select(func.coalesce(func.sum(Movement.quantity), 0)).where(
                Movement.product_id == product_id,
                Movement.kind == MovementKind(kind).value,
            )
        ).scalar_one()
        return int(total)

    def verify_product_consistency(self, product_id: int, initial_stock: int = 0) -> bool:
        """True when stock == initial_stock + sum(ENTRY) - sum(EXIT)."""
        stock = self.session.execute(
            select(Product.stock).where(Product.id == product_id)
        ).scalar_one_or_none()
        if stock is None:
            raise ProductNotFoundError(product_id=product_id)

        entries = self.sum_by_product_and_kind(product_id, MovementKind.ENTRY)
        exits = self.sum_by_product_and_kind(product_id, MovementKind.EXIT)
        return stock == initial_stock + entries - exits
