"""
Low-stock JSON export.

Writes a JSON array of the products whose stock is below a threshold.
Key names and order are fixed by the consumers of this file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from stock_kernel.db.engine import session_scope
from stock_kernel.domain.dtos import ProductInfo
from stock_kernel.logging_config import get_logger
from stock_kernel.selectors.report_selector import ReportSelector

logger = get_logger("io.json_exporter")


def product_to_json(product: ProductInfo) -> dict[str, Any]:
    return {
        "id_producto": product.id,
        "nombre": product.name,
        "categoria": product.category,
        "precio": product.price,
        "stock": product.stock,
    }


def export_low_stock(
    session_factory: sessionmaker[Session],
    threshold: int,
    path: str | Path,
) -> int:
    """
    Export products with ``stock < threshold`` to ``path``.

    Returns:
        Number of products written.  An empty result still writes ``[]``.
    """
    with session_scope(session_factory, "export_low_stock") as session:
        products = ReportSelector(session).low_stock_products(threshold)

    payload = [product_to_json(p) for p in products]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=4, ensure_ascii=False)

    logger.info(
        "low_stock_exported",
        extra={"path": str(path), "threshold": threshold, "count": len(payload)},
    )
    return len(payload)
