"""
Module: stock_kernel.db.types
Responsibility: Shared column types for inventory models.
Architecture position: Kernel > DB.  May be imported by models/, services/,
    and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    - Quantities and stock levels are integers.  No floats anywhere.
    - Price is an opaque string; it is never parsed as a number.
"""

from sqlalchemy import BigInteger, Integer

# Identity integer: BIGINT on PostgreSQL, INTEGER on SQLite (only INTEGER
# PRIMARY KEY columns auto-increment there).
IdentityInteger = BigInteger().with_variant(Integer(), "sqlite")
