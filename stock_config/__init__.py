"""
stock_config -- settings for the stock ledger.

``load_settings()`` is the single entry point: defaults, then an optional
YAML file, then environment overrides.  The kernel never reads settings
itself; callers pass the resolved values to ``create_store_engine`` and
``configure_logging``.
"""

from stock_config.loader import load_settings
from stock_config.schema import DEFAULT_DATABASE_URL, StockSettings

__all__ = [
    "DEFAULT_DATABASE_URL",
    "StockSettings",
    "load_settings",
]
