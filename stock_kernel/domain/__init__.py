"""
Pure domain layer.

Data transfer objects, validation helpers and the clock abstraction, with
NO dependencies on the ORM or the database.
"""

from stock_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from stock_kernel.domain.dtos import (
    CategoryStockRow,
    MovementInfo,
    MovementReportRow,
    ProductInfo,
    TopSellerRow,
)

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "ProductInfo",
    "MovementInfo",
    "MovementReportRow",
    "TopSellerRow",
    "CategoryStockRow",
]
