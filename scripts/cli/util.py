"""CLI utilities: prompts and product formatting."""

W = 72


def ask(prompt: str) -> str:
    """Read one stripped line."""
    return input(f"  {prompt}").strip()


def ask_int(prompt: str, default: int | None = None) -> int:
    """Read an integer.  Blank returns ``default`` when one is given."""
    raw = ask(prompt)
    if not raw and default is not None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"'{raw}' is not a whole number") from None


def confirm(prompt: str) -> bool:
    return ask(f"{prompt} (y/N): ").lower() in ("y", "yes", "s", "si")


def header(title: str) -> None:
    print()
    print("=" * W)
    print(f"  {title}".center(W))
    print("=" * W)


def print_product(product) -> None:
    print(f"  ID:        {product.id}")
    print(f"  Name:      {product.name}")
    print(f"  Category:  {product.category}")
    print(f"  Price:     {product.price}")
    print(f"  Stock:     {product.stock}")
