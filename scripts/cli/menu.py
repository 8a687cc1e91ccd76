"""CLI menu: print main menu."""

from scripts.cli.util import W

MENU_ITEMS = [
    ("1", "Create product"),
    ("2", "List products"),
    ("3", "Modify product"),
    ("4", "Delete product (with its movements)"),
    ("5", "Load products from CSV"),
    ("6", "Record stock entry"),
    ("7", "Record stock exit"),
    ("8", "Movement history of a product"),
    ("9", "Export low-stock products to JSON"),
    ("10", "Export inventory to XML"),
    ("11", "Import inventory from XML (replaces everything)"),
    ("12", "Movements by date range"),
    ("13", "Top selling products"),
    ("14", "Stock by category"),
    ("0", "Quit"),
]


def print_menu():
    """Print the main interactive menu."""
    print()
    print("=" * W)
    print("  STOCK LEDGER".center(W))
    print("=" * W)
    print()
    for key, label in MENU_ITEMS:
        print(f"   {key:>2}.  {label}")
    print()
