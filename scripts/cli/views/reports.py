"""CLI views: top sellers and stock by category."""

from stock_kernel.db.engine import session_scope
from stock_kernel.selectors.report_selector import ReportSelector

from scripts.cli.util import ask_int, header


def show_top_sellers(ctx):
    limit = ask_int("How many products? [5]: ", default=5)
    with session_scope(ctx.session_factory, "top_sellers") as session:
        rows = ReportSelector(session).top_selling_products(limit)

    header("TOP SELLING PRODUCTS")
    print(f"  {'#':>3}  {'Name':<24} {'Category':<16} {'Price':>10} {'Sold':>7}")
    print(f"  {'-'*3}  {'-'*24} {'-'*16} {'-'*10} {'-'*7}")
    for rank, r in enumerate(rows, 1):
        print(f"  {rank:>3}  {r.name[:24]:<24} {r.category[:16]:<16} {r.price[:10]:>10} {r.total_sold:>7}")


def show_stock_by_category(ctx):
    with session_scope(ctx.session_factory, "stock_by_category") as session:
        rows = ReportSelector(session).stock_by_category()

    header("STOCK BY CATEGORY")
    if not rows:
        print("\n  No products.\n")
        return
    print(f"  {'Category':<24} {'Products':>9} {'Stock':>9}")
    print(f"  {'-'*24} {'-'*9} {'-'*9}")
    for r in rows:
        print(f"  {r.category[:24]:<24} {r.product_count:>9} {r.total_stock:>9}")
