"""Database layer - engine, base classes, types, and immutability."""

from stock_kernel.db.base import Base, TrackedBase
from stock_kernel.db.engine import (
    create_session_factory,
    create_store_engine,
    create_tables,
    drop_tables,
    session_scope,
)
from stock_kernel.db.types import IdentityInteger

__all__ = [
    "create_store_engine",
    "create_session_factory",
    "session_scope",
    "create_tables",
    "drop_tables",
    "Base",
    "TrackedBase",
    "IdentityInteger",
]
