"""
Module: stock_kernel.models.movement
Responsibility: ORM persistence for stock movements -- the append-only log of
    every quantity change applied to a product.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - quantity > 0 (CHECK constraint ck_movement_quantity_positive).  The
      direction lives in kind, never in the sign of quantity.
    - Append-only.  ORM listeners in db/immutability.py reject UPDATE and
      per-row DELETE; rows leave the table only through the set-based
      deletes of the cascade and bulk-replace paths.
    - For every product: stock == initial + sum(ENTRY) - sum(EXIT).

Failure modes:
    - IntegrityError if product_id does not reference an existing product.
    - ImmutabilityViolationError on ORM update/delete.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stock_kernel.db.base import Base
from stock_kernel.db.types import IdentityInteger


class MovementKind(str, Enum):
    """Direction of a stock movement.

    Contract: Every Movement has exactly one kind -- ENTRY or EXIT.
    Guarantees: quantity is always positive; kind determines the sign.
    """

    ENTRY = "entry"
    EXIT = "exit"

    @property
    def sign(self) -> int:
        """+1 for ENTRY, -1 for EXIT."""
        return 1 if self is MovementKind.ENTRY else -1


class Movement(Base):
    """
    One stock change applied to one product.

    Contract:
        Created only by MovementLedger.append, inside a StockLedgerEngine
        transaction that also updated the product's stock.  Never mutated.
    """

    __tablename__ = "stock_movements"

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_movement_quantity_positive"),
        CheckConstraint(
            "kind IN ('entry', 'exit')", name="ck_movement_kind_valid"
        ),
        Index("idx_movement_product", "product_id"),
        Index("idx_movement_created_at", "created_at"),
    )

    product_id: Mapped[int] = mapped_column(
        IdentityInteger,
        ForeignKey("products.id"),
        nullable=False,
    )

    kind: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # Insertion time, taken from the engine's clock
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<Movement {self.id}: product={self.product_id} "
            f"{self.kind} {self.quantity}>"
        )
