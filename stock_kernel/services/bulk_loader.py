"""
BulkProductLoader -- batch insertion and wholesale replacement of products.

Responsibility:
    Persists externally supplied product records (CSV batch, XML import)
    with their literal ids.  ``replace_all`` is the destructive path: it
    wipes the movement log and the product table, then re-inserts.

Architecture position:
    Kernel > Services.  Flush-only; the caller wraps each batch in one
    ``session_scope`` so that a failing row aborts the whole batch.

Invariants enforced:
    - Stock >= 0 and non-empty name/category for every record, checked
      before anything is written.
    - No movements are created for loaded stock.
    - replace_all removes movements before products (FK order).

Failure modes:
    - InvalidQuantityError / InvalidProductFieldError on a bad record.
    - IntegrityError on a duplicate id (caller's transaction rolls back).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sqlalchemy import delete

from stock_kernel.domain.dtos import ProductInfo
from stock_kernel.domain.validation import require_non_negative_stock, require_text
from stock_kernel.logging_config import get_logger
from stock_kernel.models.product import Product
from stock_kernel.services.base import BaseService
from stock_kernel.services.movement_ledger import MovementLedger

logger = get_logger("services.bulk_loader")


@dataclass(frozen=True)
class ReplaceSummary:
    """Counts reported by BulkProductLoader.replace_all."""

    movements_removed: int
    products_removed: int
    products_inserted: int


class BulkProductLoader(BaseService):
    """Batch writer for product records that carry their own ids."""

    def _validated(self, records: Iterable[ProductInfo]) -> Sequence[ProductInfo]:
        checked = []
        for record in records:
            require_non_negative_stock(record.stock)
            require_text(record.name, "name")
            require_text(record.category, "category")
            checked.append(record)
        return checked

    def insert_products(self, records: Iterable[ProductInfo]) -> int:
        """
        Insert every record with its literal id.  Returns the count.

        All records are validated before the first insert.
        """
        checked = self._validated(records)
        self.session.add_all(
            Product(
                id=r.id,
                name=r.name.strip(),
                category=r.category.strip(),
                price=r.price,
                stock=r.stock,
            )
            for r in checked
        )
        self.session.flush()

        logger.info("products_bulk_inserted", extra={"count": len(checked)})
        return len(checked)

    def replace_all(self, records: Iterable[ProductInfo]) -> ReplaceSummary:
        """
        Delete every movement and every product, then insert ``records``.

        History is not preserved.  Validation happens before the wipe.
        """
        checked = self._validated(records)

        movements_removed = MovementLedger(self.session).delete_all()
        products_removed = self.session.execute(
            delete(Product).execution_options(synchronize_session=False)
        ).rowcount
        inserted = self.insert_products(checked)

        logger.warning(
            "products_bulk_replaced",
            extra={
                "movements_removed": movements_removed,
                "products_removed": products_removed,
                "products_inserted": inserted,
            },
        )
        return ReplaceSummary(
            movements_removed=movements_removed,
            products_removed=products_removed,
            products_inserted=inserted,
        )
