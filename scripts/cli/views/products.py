"""CLI views: create, list, modify and delete products."""

from stock_kernel.db.engine import session_scope
from stock_kernel.services.product_registry import ProductRegistry

from scripts.cli.util import ask, ask_int, confirm, header, print_product


def create_product(ctx):
    header("CREATE PRODUCT")
    name = ask("Name: ")
    category = ask("Category: ")
    price = ask("Price: ")
    stock = ask_int("Initial stock: ")
    product_id = ctx.ledger.create_product(name, category, price, stock)
    print(f"\n  Product created with id {product_id}.")


def show_products(ctx):
    with session_scope(ctx.session_factory, "list_products") as session:
        products = ProductRegistry(session).list_all()
    header("PRODUCTS")
    if not products:
        print("\n  No products.\n")
        return
    print(f"  {'ID':>6}  {'Name':<24} {'Category':<16} {'Price':>10} {'Stock':>7}")
    print(f"  {'-'*6}  {'-'*24} {'-'*16} {'-'*10} {'-'*7}")
    for p in products:
        print(f"  {p.id:>6}  {p.name[:24]:<24} {p.category[:16]:<16} {p.price[:10]:>10} {p.stock:>7}")
    print(f"\n  Total: {len(products)} products")


def _find_by_name(ctx, prompt):
    name = ask(prompt)
    with session_scope(ctx.session_factory, "find_product") as session:
        return ProductRegistry(session).find_by_name(name)


def modify_product(ctx):
    """Blank answers keep the current value.  A stock change goes through the ledger."""
    product = _find_by_name(ctx, "Name of the product to modify: ")
    print("\n  Current product:")
    print_product(product)
    print("\n  Enter the new values (blank keeps the current one):")
    name = ask(f"New name [{product.name}]: ") or product.name
    category = ask(f"New category [{product.category}]: ") or product.category
    price = ask(f"New price [{product.price}]: ") or product.price
    stock = ask_int(f"New stock [{product.stock}]: ", default=product.stock)

    movement = ctx.ledger.update_product(
        product.id,
        name,
        category,
        price,
        desired_stock=stock if stock != product.stock else None,
    )
    print("\n  Product updated.")
    if movement is not None:
        print(f"  Recorded {movement.kind.value} of {movement.quantity} units.")


def delete_product(ctx):
    product = _find_by_name(ctx, "Name of the product to delete: ")
    print("\n  Product found:")
    print_product(product)
    if not confirm("\n  Delete this product and all its movements?"):
        print("  Cancelled.")
        return
    removed = ctx.ledger.delete_product_cascade(product.id)
    print(f"\n  Product deleted together with {removed} movements.")
