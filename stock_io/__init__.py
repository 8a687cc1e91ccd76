"""
stock_io -- file adapters for the stock ledger.

CSV batch loading, low-stock JSON export and XML export/import.  Adapters
talk to the store only through kernel services and selectors.
"""

from stock_io.csv_loader import CsvLineError, CsvProductLoader
from stock_io.json_exporter import export_low_stock
from stock_io.xml_manager import export_products, import_products, load_document

__all__ = [
    "CsvLineError",
    "CsvProductLoader",
    "export_low_stock",
    "export_products",
    "import_products",
    "load_document",
]
