"""
Kernel services.

StockLedgerEngine owns transactions; the other services are flush-only and
run inside a session supplied by the caller.
"""

from stock_kernel.services.bulk_loader import BulkProductLoader, ReplaceSummary
from stock_kernel.services.movement_ledger import MovementLedger
from stock_kernel.services.product_registry import ProductRegistry
from stock_kernel.services.stock_ledger import StockLedgerEngine

__all__ = [
    "BulkProductLoader",
    "MovementLedger",
    "ProductRegistry",
    "ReplaceSummary",
    "StockLedgerEngine",
]
