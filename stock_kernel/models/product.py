"""
Module: stock_kernel.models.product
Responsibility: ORM persistence for products -- identity, descriptive fields
    and the current stock level.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - stock >= 0 (CHECK constraint ck_product_stock_non_negative).  The
      guarded decrement in StockLedgerEngine keeps stock non-negative at the
      point of every write; the constraint rejects anything that bypasses it.
    - Product has no relationship to its movements.  Movements point at the
      product, never the reverse.

Failure modes:
    - IntegrityError on duplicate id or a negative stock value.
"""

from sqlalchemy import CheckConstraint, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stock_kernel.db.base import TrackedBase
from stock_kernel.db.types import IdentityInteger


class Product(TrackedBase):
    """
    An inventory item.

    Contract:
        id is assigned by ProductRegistry.create (max existing id + 1) or
        taken verbatim from a bulk load.  It is never reused or mutated.
        stock is changed only by StockLedgerEngine.

    Non-goals:
        price is opaque text; no numeric parsing or currency handling.
    """

    __tablename__ = "products"

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
        Index("idx_product_name", "name"),
        Index("idx_product_category", "category"),
    )

    id: Mapped[int] = mapped_column(
        IdentityInteger,
        primary_key=True,
        autoincrement=False,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    price: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    def __repr__(self) -> str:
        return f"<Product {self.id}: {self.name} stock={self.stock}>"
