"""
ProductRegistry -- product identity and metadata.

Responsibility:
    Creates products, looks them up by id or name, updates their
    descriptive fields, and performs the final step of the cascading
    delete.  The registry never changes stock after creation; stock moves
    only through StockLedgerEngine.

Architecture position:
    Kernel > Services.  Flush-only (BaseService contract).  Called by
    StockLedgerEngine, by the CLI inside ``session_scope``, and by tests.

Invariants enforced:
    - Identity: new ids are ``max(id) + 1`` (1 on an empty table) and are
      never mutated.
    - Initial stock >= 0.  Initial stock is NOT recorded as a movement.
    - Cascade order: ``delete`` refuses to run unless the calling
      StockLedgerEngine has opened a cascade for this product in this
      session (movements already removed).

Failure modes:
    - InvalidQuantityError: negative initial stock.
    - InvalidProductFieldError: empty name or category.
    - ProductNotFoundError: lookup/update/delete matched nothing.
    - CascadeContractError: delete called outside the engine's cascade.
    - IntegrityError: two concurrent creates computed the same id; the
      engine wraps it as TransactionFailureError.
"""

from __future__ import annotations

from sqlalchemy import delete, func, select, update

from stock_kernel.domain.dtos import ProductInfo
from stock_kernel.domain.validation import require_non_negative_stock, require_text
from stock_kernel.exceptions import CascadeContractError, ProductNotFoundError
from stock_kernel.logging_config import get_logger
from stock_kernel.models.product import Product
from stock_kernel.services.base import BaseService

logger = get_logger("services.product_registry")

# session.info key holding the product id whose cascade is in progress
CASCADE_INFO_KEY = "stock_kernel.cascade_product_id"


class ProductRegistry(BaseService):
    """
    Registry of products.

    Contract:
        All writes flush into the caller's session.  Reads return
        ProductInfo snapshots, never ORM instances.

    Non-goals:
        - Does NOT apply stock changes (see StockLedgerEngine).
        - Does NOT enforce unique names; ``find_by_name`` returns the
          lowest id among duplicates.
    """

    def next_id(self) -> int:
        """Return the id the next created product will receive."""
        current = self.session.execute(select(func.max(Product.id))).scalar()
        return (current or 0) + 1

    def create(
        self,
        name: str,
        category: str,
        price: str,
        initial_stock: int,
    ) -> int:
        """
        Register a product and return its id.

        Preconditions:
            - ``initial_stock`` is an integer >= 0.
            - ``name`` and ``category`` are non-empty.

        Postconditions:
            - A products row exists with the returned id.
            - No movement was written.
        """
        require_non_negative_stock(initial_stock)
        name = require_text(name, "name")
        category = require_text(category, "category")

        product_id = self.next_id()
        product = Product(
            id=product_id,
            name=name,
            category=category,
            price="" if price is None else str(price),
            stock=initial_stock,
        )
        self.session.add(product)
        self.session.flush()

        logger.info(
            "product_created",
            extra={
                "product_id": product_id,
                "category": category,
                "initial_stock": initial_stock,
            },
        )
        return product_id

    def find_by_id(self, product_id: int) -> ProductInfo:
        product = self.session.get(Product, product_id, populate_existing=True)
        if product is None:
            raise ProductNotFoundError(product_id=product_id)
        return ProductInfo.from_model(product)

    def find_by_name(self, name: str) -> ProductInfo:
        product = self.session.execute(
            select(Product)
            .where(Product.name == name)
            .order_by(Product.id)
            .limit(1)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if product is None:
            raise ProductNotFoundError(name=name)
        return ProductInfo.from_model(product)

    def list_all(self) -> list[ProductInfo]:
        """Every product, ordered by id."""
        products = self.session.execute(
            select(Product)
            .order_by(Product.id)
            .execution_options(populate_existing=True)
        ).scalars()
        return [ProductInfo.from_model(p) for p in products]

    def update_fields(
        self,
        product_id: int,
        name: str,
        category: str,
        price: str,
    ) -> None:
        """
        Overwrite name, category and price.  Stock is untouched.

        Raises:
            ProductNotFoundError: No row matched ``product_id``.
        """
        name = require_text(name, "name")
        category = require_text(category, "category")

        result = self.session.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(name=name, category=category, price=str(price))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ProductNotFoundError(product_id=product_id)

        logger.info("product_fields_updated", extra={"product_id": product_id})

    def delete(self, product_id: int, *, guard: object = None) -> None:
        """
        Remove the product row.  Second step of the cascading delete.

        Args:
            product_id: Product to remove.
            guard: The StockLedgerEngine running the cascade.

        Raises:
            CascadeContractError: Not called from the engine's cascade.
            ProductNotFoundError: No row matched ``product_id``.
        """
        # Inline import: stock_ledger imports this module
        from stock_kernel.services.stock_ledger import StockLedgerEngine

        if (
            not isinstance(guard, StockLedgerEngine)
            or self.session.info.get(CASCADE_INFO_KEY) != product_id
        ):
            logger.error(
                "cascade_contract_violation", extra={"product_id": product_id}
            )
            raise CascadeContractError(product_id)

        result = self.session.execute(
            delete(Product)
            .where(Product.id == product_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ProductNotFoundError(product_id=product_id)
