"""
Configuration schema (``stock_config.schema``).

Frozen dataclass describing everything the stock ledger reads from its
environment.  Produced only by ``stock_config.load_settings``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

DEFAULT_DATABASE_URL = "sqlite:///stock_ledger.db"


@dataclass(frozen=True)
class StockSettings:
    """Runtime settings for the engine, the CLI and the file adapters."""

    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 10
    pool_timeout: int = 30
    log_level: str = "INFO"

    # File adapters
    csv_path: str = "inventario.csv"
    csv_error_log: str = "errores.log"
    json_export_path: str = "stock_bajo.json"
    low_stock_threshold: int = 10
    xml_path: str = "inventario.xml"

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))
