"""CLI setup: engine, tables, listeners and the services the views use."""

from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from stock_config import StockSettings
from stock_kernel.db.engine import (
    create_session_factory,
    create_store_engine,
    create_tables,
)
from stock_kernel.db.immutability import register_immutability_listeners
from stock_kernel.services.stock_ledger import StockLedgerEngine


@dataclass
class CliContext:
    """Everything a menu handler needs."""

    settings: StockSettings
    session_factory: sessionmaker[Session]
    ledger: StockLedgerEngine


def full_setup(settings: StockSettings) -> CliContext:
    """Connect, create missing tables and build the ledger engine."""
    engine = create_store_engine(
        settings.database_url,
        echo=settings.echo,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
    )
    create_tables(engine)
    register_immutability_listeners()
    session_factory = create_session_factory(engine)
    return CliContext(
        settings=settings,
        session_factory=session_factory,
        ledger=StockLedgerEngine(session_factory),
    )
