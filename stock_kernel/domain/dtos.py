"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable records returned by the registry, the engine and
    the selectors.  Callers never receive ORM instances, so nothing outside
    the kernel can mutate a Product or Movement by accident.

Architecture position:
    Kernel > Domain -- zero I/O.  from_model() class methods are boundary
    converters invoked from the service and selector layers only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stock_kernel.models.movement import Movement as MovementModel
    from stock_kernel.models.movement import MovementKind
    from stock_kernel.models.product import Product as ProductModel


@dataclass(frozen=True)
class ProductInfo:
    """Snapshot of a product row."""

    id: int
    name: str
    category: str
    price: str
    stock: int

    @classmethod
    def from_model(cls, model: ProductModel) -> ProductInfo:
        return cls(
            id=model.id,
            name=model.name,
            category=model.category,
            price=model.price,
            stock=model.stock,
        )


@dataclass(frozen=True)
class MovementInfo:
    """One entry of the movement log."""

    id: int
    product_id: int
    kind: MovementKind
    quantity: int
    created_at: datetime

    @property
    def signed_quantity(self) -> int:
        """Quantity with the sign implied by kind."""
        return self.kind.sign * self.quantity

    @classmethod
    def from_model(cls, model: MovementModel) -> MovementInfo:
        from stock_kernel.models.movement import MovementKind

        return cls(
            id=model.id,
            product_id=model.product_id,
            kind=MovementKind(model.kind),
            quantity=model.quantity,
            created_at=model.created_at,
        )


@dataclass(frozen=True)
class MovementReportRow:
    """A movement joined with the name and category of its product."""

    movement_id: int
    product_id: int
    product_name: str
    category: str
    kind: MovementKind
    quantity: int
    created_at: datetime


@dataclass(frozen=True)
class TopSellerRow:
    """A product ranked by total EXIT quantity."""

    product_id: int
    name: str
    category: str
    price: str
    total_sold: int


@dataclass(frozen=True)
class CategoryStockRow:
    """Stock totals for one category."""

    category: str
    product_count: int
    total_stock: int
