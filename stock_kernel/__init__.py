"""
Stock Kernel

A transactional stock ledger with:
- Atomic stock update + movement append
- Guarded (conditional) decrements that never oversell
- Append-only movement history
- Cascading product deletion in a single transaction
"""

__version__ = "0.1.0"
