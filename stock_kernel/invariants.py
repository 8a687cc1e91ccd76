"""
Kernel Invariants Contract.

These invariants are structural law. No configuration flag may switch them
off.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across StockLedgerEngine, the table check
constraints, and the ORM listeners in stock_kernel.db.immutability.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel."""

    NON_NEGATIVE_STOCK = "non_negative_stock"
    """stock >= 0 at all times. Enforced by the guarded decrement in
    StockLedgerEngine.apply_exit and by CHECK (stock >= 0)."""

    LEDGER_CONSISTENCY = "ledger_consistency"
    """stock == initial + sum(ENTRY) - sum(EXIT) for every product.
    Enforced by applying the stock update and the movement append in the
    same transaction."""

    APPEND_ONLY = "append_only"
    """Movements are never updated. Enforced by ORM listeners
    (stock_kernel.db.immutability)."""

    CASCADE_ORDER = "cascade_order"
    """A product is deleted only after all of its movements, inside one
    transaction. Enforced by StockLedgerEngine.delete_product_cascade."""

    ATOMICITY = "atomicity"
    """Every stock-mutating operation commits once or rolls back entirely.
    Enforced by StockLedgerEngine.transaction()."""


ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "stock_io",
    "scripts",
)
