"""CLI views: stock entries and exits, movement history, date-range report."""

from stock_kernel.db.engine import session_scope
from stock_kernel.selectors.movement_selector import MovementSelector
from stock_kernel.services.product_registry import ProductRegistry

from scripts.cli.util import ask, ask_int, header


def record_entry(ctx):
    header("STOCK ENTRY")
    product_id = ask_int("Product id: ")
    quantity = ask_int("Quantity to add: ")
    movement = ctx.ledger.apply_entry(product_id, quantity)
    print(f"\n  Entry recorded (movement {movement.id}).")


def record_exit(ctx):
    header("STOCK EXIT")
    product_id = ask_int("Product id: ")
    quantity = ask_int("Quantity to remove: ")
    movement = ctx.ledger.apply_exit(product_id, quantity)
    print(f"\n  Exit recorded (movement {movement.id}).")


def show_history(ctx):
    product_id = ask_int("Product id: ")
    with session_scope(ctx.session_factory, "movement_history") as session:
        product = ProductRegistry(session).find_by_id(product_id)
        movements = MovementSelector(session).query_by_product(product_id)

    header(f"MOVEMENTS OF {product.name.upper()}")
    if not movements:
        print("\n  No movements.\n")
        return
    print(f"  {'Date':<20} {'Type':<6} {'Change':>9}")
    print(f"  {'-'*20} {'-'*6} {'-'*9}")
    for m in movements:
        print(f"  {m.created_at:%Y-%m-%d %H:%M:%S} {m.kind.value:<6} {m.signed_quantity:>+9}")


def show_date_range(ctx):
    start = ask("From (YYYY-MM-DD): ")
    end = ask("To (YYYY-MM-DD): ")
    with session_scope(ctx.session_factory, "movements_by_date") as session:
        rows = MovementSelector(session).query_by_date_range(start, end)

    header(f"MOVEMENTS {start} .. {end}")
    if not rows:
        print("\n  No movements in that range.\n")
        return
    print(f"  {'Date':<20} {'Product':<24} {'Category':<14} {'Type':<6} {'Qty':>6}")
    print(f"  {'-'*20} {'-'*24} {'-'*14} {'-'*6} {'-'*6}")
    for r in rows:
        print(
            f"  {r.created_at:%Y-%m-%d %H:%M:%S} {r.product_name[:24]:<24} "
            f"{r.category[:14]:<14} {r.kind.value:<6} {r.quantity:>6}"
        )
    print(f"\n  Total: {len(rows)} movements")
