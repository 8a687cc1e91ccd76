"""CLI views: products, movements, reports, files."""

from scripts.cli.views.files import export_json, export_xml, import_xml, load_csv
from scripts.cli.views.movements import (
    record_entry,
    record_exit,
    show_date_range,
    show_history,
)
from scripts.cli.views.products import (
    create_product,
    delete_product,
    modify_product,
    show_products,
)
from scripts.cli.views.reports import show_stock_by_category, show_top_sellers

__all__ = [
    "create_product",
    "show_products",
    "modify_product",
    "delete_product",
    "load_csv",
    "record_entry",
    "record_exit",
    "show_history",
    "export_json",
    "export_xml",
    "import_xml",
    "show_date_range",
    "show_top_sellers",
    "show_stock_by_category",
]
