"""
CSV batch loader for products.

Semicolon-delimited ``id;name;category;price;stock`` with a header line.
Two passes: the first validates every line (header included) and appends
one entry per bad line to an error log; the second inserts the data rows
in a single transaction.  A file with any bad line loads nothing.

Quotes carry no meaning: every ``;`` separates columns, so
``1;"Bolt;Large";Tools;1;5`` has six columns and is rejected.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.orm import Session, sessionmaker

from stock_kernel.db.engine import session_scope
from stock_kernel.domain.dtos import ProductInfo
from stock_kernel.exceptions import CsvValidationError
from stock_kernel.logging_config import get_logger
from stock_kernel.services.bulk_loader import BulkProductLoader

logger = get_logger("io.csv_loader")

DELIMITER = ";"
COLUMN_COUNT = 5
SEPARATOR = "-" * 50


@dataclass(frozen=True)
class CsvLineError:
    """One malformed line found during validation."""

    line_number: int
    reason: str
    content: str


def _read_lines(path: Path) -> Iterator[tuple[int, str, list[str]]]:
    """Yield (line number, raw text, columns) for every physical line."""
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        for line_number, raw in enumerate(f, start=1):
            text = raw.rstrip("\r\n")
            columns = next(csv.reader([text], delimiter=DELIMITER, quoting=csv.QUOTE_NONE), [])
            yield line_number, text, columns


def _check_columns(line_number: int, columns: list[str]) -> str | None:
    if len(columns) != COLUMN_COUNT:
        return f"Número incorrecto de columnas: {len(columns)}"
    if line_number == 1:
        # Header: only the column count is checked
        return None
    try:
        int(columns[0].strip())
    except ValueError:
        return f"id_producto no es un entero: {columns[0].strip()!r}"
    try:
        stock = int(columns[4].strip())
    except ValueError:
        return f"stock no es un entero: {columns[4].strip()!r}"
    if stock < 0:
        return f"stock negativo: {stock}"
    if not columns[1].strip() or not columns[2].strip():
        return "nombre y categoria no pueden estar vacíos"
    return None


class CsvProductLoader:
    """
    Loads products from a CSV file through BulkProductLoader.

    Args:
        session_factory: Store handle used for the insert transaction.
        error_log: File that receives one entry per malformed line.
            Entries are appended; the file is created on first error.
    """

    def __init__(self, session_factory: sessionmaker[Session], error_log: str | Path):
        self._session_factory = session_factory
        self._error_log = Path(error_log)

    def validate(self, path: str | Path) -> list[CsvLineError]:
        """First pass.  Returns the malformed lines and writes them to the log."""
        path = Path(path)
        errors = []
        for line_number, text, columns in _read_lines(path):
            reason = _check_columns(line_number, columns)
            if reason is not None:
                errors.append(CsvLineError(line_number, reason, text))

        if errors:
            with self._error_log.open("a", encoding="utf-8") as log:
                for error in errors:
                    log.write(f"Error en línea {error.line_number}: {error.reason}\n")
                    log.write(f"Contenido: {error.content}\n")
                    log.write(f"{SEPARATOR}\n")
            logger.warning(
                "csv_validation_failed",
                extra={
                    "source": str(path),
                    "error_count": len(errors),
                    "error_log": str(self._error_log),
                },
            )
        return errors

    def parse(self, path: str | Path) -> list[ProductInfo]:
        """Data rows (header skipped) as ProductInfo records.  Assumes a valid file."""
        records = []
        for line_number, _text, columns in _read_lines(Path(path)):
            if line_number == 1:
                continue
            product_id, name, category, price, stock = (c.strip() for c in columns)
            records.append(
                ProductInfo(
                    id=int(product_id),
                    name=name,
                    category=category,
                    price=price,
                    stock=int(stock),
                )
            )
        return records

    def load(self, path: str | Path) -> int:
        """
        Validate, then insert every data row in one transaction.

        Returns:
            Number of products inserted.

        Raises:
            CsvValidationError: At least one line is malformed.  Nothing
                was written to the store.
            TransactionFailureError: The store rejected the batch, e.g. an
                id that already exists.  Nothing was written.
            FileNotFoundError: ``path`` does not exist.
        """
        errors = self.validate(path)
        if errors:
            raise CsvValidationError(str(path), len(errors), str(self._error_log))

        records = self.parse(path)
        with session_scope(self._session_factory, "load_csv") as session:
            inserted = BulkProductLoader(session).insert_products(records)

        logger.info("csv_loaded", extra={"source": str(path), "count": inserted})
        return inserted
