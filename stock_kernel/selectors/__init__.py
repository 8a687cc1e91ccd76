"""Selectors for the stock kernel (read side)."""

from stock_kernel.selectors.movement_selector import MovementSelector
from stock_kernel.selectors.report_selector import ReportSelector

__all__ = [
    "MovementSelector",
    "ReportSelector",
]
