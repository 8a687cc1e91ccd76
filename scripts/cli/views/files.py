"""CLI views: CSV load, JSON export, XML export/import."""

from stock_io.csv_loader import CsvProductLoader
from stock_io.json_exporter import export_low_stock
from stock_io.xml_manager import export_products, import_products

from scripts.cli.util import ask, ask_int, confirm


def load_csv(ctx):
    settings = ctx.settings
    path = ask(f"CSV file [{settings.csv_path}]: ") or settings.csv_path
    loader = CsvProductLoader(ctx.session_factory, settings.csv_error_log)
    count = loader.load(path)
    print(f"\n  {count} products loaded from {path}.")


def export_json(ctx):
    settings = ctx.settings
    threshold = ask_int(
        f"Stock threshold [{settings.low_stock_threshold}]: ",
        default=settings.low_stock_threshold,
    )
    path = ask(f"Output file [{settings.json_export_path}]: ") or settings.json_export_path
    count = export_low_stock(ctx.session_factory, threshold, path)
    print(f"\n  {count} products with stock below {threshold} written to {path}.")


def export_xml(ctx):
    path = ask(f"Output file [{ctx.settings.xml_path}]: ") or ctx.settings.xml_path
    count = export_products(ctx.session_factory, path)
    print(f"\n  {count} products written to {path}.")


def import_xml(ctx):
    path = ask(f"XML file [{ctx.settings.xml_path}]: ") or ctx.settings.xml_path
    if not confirm("This deletes every product and movement first. Continue?"):
        print("  Cancelled.")
        return
    summary = import_products(ctx.session_factory, path)
    print(
        f"\n  Inventory replaced: {summary.products_inserted} products loaded "
        f"({summary.products_removed} products and "
        f"{summary.movements_removed} movements removed)."
    )
