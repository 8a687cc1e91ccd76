"""ORM models for the stock kernel."""

from stock_kernel.models.movement import Movement, MovementKind
from stock_kernel.models.product import Product

__all__ = [
    "Product",
    "Movement",
    "MovementKind",
]
