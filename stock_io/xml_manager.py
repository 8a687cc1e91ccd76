"""
XML export and import of the whole inventory.

Document shape::

    <inventario>
      <producto id="1">
        <nombre>...</nombre>
        <categoria>...</categoria>
        <precio>...</precio>
        <stock>...</stock>
      </producto>
      ...
    </inventario>

Import is validated against this shape before anything is written, then
replaces every product (and the whole movement log) in one transaction.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from sqlalchemy.orm import Session, sessionmaker

from stock_kernel.db.engine import session_scope
from stock_kernel.domain.dtos import ProductInfo
from stock_kernel.exceptions import XmlSchemaError
from stock_kernel.logging_config import get_logger
from stock_kernel.services.bulk_loader import BulkProductLoader, ReplaceSummary
from stock_kernel.services.product_registry import ProductRegistry

logger = get_logger("io.xml_manager")

ROOT_TAG = "inventario"
PRODUCT_TAG = "producto"
CHILD_TAGS = ("nombre", "categoria", "precio", "stock")


def build_document(products: list[ProductInfo]) -> ET.ElementTree:
    root = ET.Element(ROOT_TAG)
    for product in products:
        element = ET.SubElement(root, PRODUCT_TAG, id=str(product.id))
        ET.SubElement(element, "nombre").text = product.name
        ET.SubElement(element, "categoria").text = product.category
        ET.SubElement(element, "precio").text = product.price
        ET.SubElement(element, "stock").text = str(product.stock)
    tree = ET.ElementTree(root)
    ET.indent(tree, space="    ")
    return tree


def export_products(session_factory: sessionmaker[Session], path: str | Path) -> int:
    """Write every product to ``path``.  Returns the number exported."""
    with session_scope(session_factory, "export_xml") as session:
        products = ProductRegistry(session).list_all()

    build_document(products).write(path, encoding="utf-8", xml_declaration=True)

    logger.info("xml_exported", extra={"path": str(path), "count": len(products)})
    return len(products)


def _parse_int(text: str | None) -> int | None:
    try:
        return int((text or "").strip())
    except ValueError:
        return None


def parse_document(root: ET.Element, source: str) -> list[ProductInfo]:
    """
    Check the inventory shape and convert it to records.

    Raises:
        XmlSchemaError: On the first structural violation.
    """
    if root.tag != ROOT_TAG:
        raise XmlSchemaError(source, f"root element must be <{ROOT_TAG}>, got <{root.tag}>")

    records = []
    seen_ids: set[int] = set()
    for position, element in enumerate(root, start=1):
        where = f"{PRODUCT_TAG} #{position}"
        if element.tag != PRODUCT_TAG:
            raise XmlSchemaError(source, f"unexpected element <{element.tag}> in <{ROOT_TAG}>")

        product_id = _parse_int(element.get("id"))
        if product_id is None:
            raise XmlSchemaError(source, f"{where}: attribute 'id' must be an integer")
        if product_id in seen_ids:
            raise XmlSchemaError(source, f"{where}: duplicate id {product_id}")
        seen_ids.add(product_id)

        tags = tuple(child.tag for child in element)
        if tags != CHILD_TAGS:
            raise XmlSchemaError(
                source,
                f"{where}: expected children {', '.join(CHILD_TAGS)}, got {', '.join(tags) or 'none'}",
            )
        values = {child.tag: (child.text or "").strip() for child in element}

        if not values["nombre"] or not values["categoria"]:
            raise XmlSchemaError(source, f"{where}: nombre and categoria must not be empty")
        stock = _parse_int(values["stock"])
        if stock is None or stock < 0:
            raise XmlSchemaError(source, f"{where}: stock must be a non-negative integer")

        records.append(
            ProductInfo(
                id=product_id,
                name=values["nombre"],
                category=values["categoria"],
                price=values["precio"],
                stock=stock,
            )
        )
    return records


def load_document(path: str | Path) -> list[ProductInfo]:
    """Parse and validate ``path`` without touching the store."""
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise XmlSchemaError(str(path), f"malformed XML: {exc}") from exc
    return parse_document(root, str(path))


def import_products(session_factory: sessionmaker[Session], path: str | Path) -> ReplaceSummary:
    """
    Replace the inventory with the contents of ``path``.

    Destructive: all movements and all products are deleted first.  An
    invalid document raises XmlSchemaError and leaves the store untouched.
    """
    records = load_document(path)
    with session_scope(session_factory, "import_xml") as session:
        summary = BulkProductLoader(session).replace_all(records)

    logger.info(
        "xml_imported",
        extra={"path": str(path), "count": summary.products_inserted},
    )
    return summary
