"""
StockLedgerEngine -- the only writer of product stock.

Responsibility:
    Applies stock entries, exits and reconciliations, updates product
    metadata together with stock, and runs the cascading product delete.
    Every public method is one database transaction: commit once on
    success, rollback on any failure.

Architecture position:
    Kernel > Services -- transaction owner.  Builds ProductRegistry and
    MovementLedger inside each transaction and drives them.  Constructed
    with an explicit sessionmaker and Clock; there is no global engine.

Invariants enforced:
    - Non-negative stock: exits are a single conditional UPDATE
      (``stock = stock - q WHERE id = :id AND stock >= q``).  No separate
      read-then-write, so concurrent exits cannot oversell.
    - Ledger consistency: the stock change and its movement are written in
      the same transaction.
    - Cascade order: movements are deleted before their product, in one
      transaction.
    - Atomicity: a failure at any step leaves no observable effect.

Failure modes:
    - InvalidQuantityError: quantity <= 0 or negative target stock.
      Raised before any store access.
    - ProductNotFoundError: entry / reconcile / update / delete on a
      missing product.
    - InsufficientStockOrNotFoundError: guarded decrement matched 0 rows.
    - TransactionFailureError: any SQLAlchemyError, after rollback.

Audit relevance:
    Every committed operation logs one INFO event with product_id and
    movement id; rejected operations log at WARNING.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from stock_kernel.domain.clock import Clock, SystemClock
from stock_kernel.domain.dtos import MovementInfo
from stock_kernel.domain.validation import (
    require_non_negative_stock,
    require_positive_quantity,
)
from stock_kernel.exceptions import (
    InsufficientStockOrNotFoundError,
    ProductNotFoundError,
    StockKernelError,
    TransactionFailureError,
)
from stock_kernel.logging_config import LogContext, get_logger, new_correlation_id
from stock_kernel.models.movement import MovementKind
from stock_kernel.models.product import Product
from stock_kernel.services.movement_ledger import MovementLedger
from stock_kernel.services.product_registry import CASCADE_INFO_KEY, ProductRegistry

logger = get_logger("services.stock_ledger")


class StockLedgerEngine:
    """
    Transactional stock engine.

    Contract:
        Each public method opens its own session from ``session_factory``
        and owns the commit.  Methods are safe to call from many threads at
        once; each call uses its own session and the engine holds no
        in-process locks.

    Non-goals:
        - Does NOT retry on lock timeouts or serialization errors.
        - Does NOT distinguish "missing product" from "not enough stock"
          on exit.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        clock: Clock | None = None,
    ):
        self._session_factory = session_factory
        self._clock = clock or SystemClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    @contextmanager
    def transaction(
        self,
        operation: str,
        product_id: int | None = None,
    ) -> Iterator[Session]:
        """
        One unit of work.

        Commits when the block exits normally.  Kernel errors are re-raised
        unchanged after rollback; store errors are re-raised as
        TransactionFailureError.
        """
        session = self._session_factory()
        with LogContext.bind(
            correlation_id=LogContext.get("correlation_id") or new_correlation_id(),
            operation=operation,
            product_id=product_id,
        ):
            try:
                yield session
                session.commit()
            except StockKernelError as exc:
                session.rollback()
                logger.warning(
                    "stock_operation_rejected",
                    extra={"error_code": exc.code, "detail": str(exc)},
                )
                raise
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error(
                    "stock_operation_failed",
                    extra={"error_type": type(exc).__name__, "detail": str(exc)},
                )
                raise TransactionFailureError(
                    operation=operation,
                    product_id=product_id,
                    reason=str(getattr(exc, "orig", None) or exc),
                ) from exc
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    # ------------------------------------------------------------------
    # Stock primitives (run inside an open transaction)
    # ------------------------------------------------------------------

    def _increment(self, session: Session, product_id: int, quantity: int) -> MovementInfo:
        result = session.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ProductNotFoundError(product_id=product_id)
        return MovementLedger(session, self._clock).append(
            product_id, MovementKind.ENTRY, quantity
        )

    def _guarded_decrement(
        self, session: Session, product_id: int, quantity: int
    ) -> MovementInfo:
        # INVARIANT: non-negative stock -- one conditional write, no read
        result = session.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise InsufficientStockOrNotFoundError(product_id, quantity)
        return MovementLedger(session, self._clock).append(
            product_id, MovementKind.EXIT, quantity
        )

    def _reconcile(
        self, session: Session, product_id: int, desired_stock: int
    ) -> MovementInfo | None:
        current = session.execute(
            select(Product.stock).where(Product.id == product_id)
        ).scalar_one_or_none()
        if current is None:
            raise ProductNotFoundError(product_id=product_id)

        delta = desired_stock - current
        if delta > 0:
            return self._increment(session, product_id, delta)
        if delta < 0:
            return self._guarded_decrement(session, product_id, -delta)
        return None

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def create_product(
        self,
        name: str,
        category: str,
        price: str,
        initial_stock: int,
    ) -> int:
        """Register a product in its own transaction.  Returns the new id."""
        with self.transaction("create_product") as session:
            return ProductRegistry(session).create(name, category, price, initial_stock)

    def apply_entry(self, product_id: int, quantity: int) -> MovementInfo:
        """
        Add ``quantity`` units to a product's stock.

        Postconditions:
            - stock increased by ``quantity``.
            - One ENTRY movement with ``quantity`` was appended.
        """
        require_positive_quantity(quantity)
        with self.transaction("apply_entry", product_id) as session:
            movement = self._increment(session, product_id, quantity)

        logger.info(
            "stock_entry_applied",
            extra={
                "product_id": product_id,
                "quantity": quantity,
                "movement_id": movement.id,
            },
        )
        return movement

    def apply_exit(self, product_id: int, quantity: int) -> MovementInfo:
        """
        Remove ``quantity`` units from a product's stock.

        Taking exactly the current stock is allowed and leaves 0.

        Raises:
            InsufficientStockOrNotFoundError: Product missing or stock
                below ``quantity``.  Nothing was written.
        """
        require_positive_quantity(quantity)
        with self.transaction("apply_exit", product_id) as session:
            movement = self._guarded_decrement(session, product_id, quantity)

        logger.info(
            "stock_exit_applied",
            extra={
                "product_id": product_id,
                "quantity": quantity,
                "movement_id": movement.id,
            },
        )
        return movement

    def reconcile_to(self, product_id: int, desired_stock: int) -> MovementInfo | None:
        """
        Bring stock to ``desired_stock`` through the ledger.

        Returns the movement written, or None when stock already matches.
        Lowering stock uses the guarded exit and can fail if a concurrent
        exit got there first.
        """
        require_non_negative_stock(desired_stock)
        with self.transaction("reconcile_to", product_id) as session:
            movement = self._reconcile(session, product_id, desired_stock)

        logger.info(
            "stock_reconciled",
            extra={
                "product_id": product_id,
                "desired_stock": desired_stock,
                "movement_id": movement.id if movement else None,
            },
        )
        return movement

    def update_product(
        self,
        product_id: int,
        name: str,
        category: str,
        price: str,
        desired_stock: int | None = None,
    ) -> MovementInfo | None:
        """
        Update metadata and, optionally, reconcile stock in one transaction.

        If the stock reconcile fails the metadata change is rolled back too.
        """
        if desired_stock is not None:
            require_non_negative_stock(desired_stock)

        with self.transaction("update_product", product_id) as session:
            ProductRegistry(session).update_fields(product_id, name, category, price)
            movement = None
            if desired_stock is not None:
                movement = self._reconcile(session, product_id, desired_stock)

        logger.info(
            "product_updated",
            extra={
                "product_id": product_id,
                "movement_id": movement.id if movement else None,
            },
        )
        return movement

    def delete_product_cascade(self, product_id: int) -> int:
        """
        Delete a product and its whole movement history.

        Step 1 removes the movements, step 2 removes the product.  Both
        happen in one transaction; a missing product rolls back step 1.

        Returns:
            Number of movements removed.
        """
        with self.transaction("delete_product_cascade", product_id) as session:
            session.info[CASCADE_INFO_KEY] = product_id
            try:
                removed = MovementLedger(session, self._clock).delete_for_product(
                    product_id
                )
                ProductRegistry(session).delete(product_id, guard=self)
            finally:
                session.info.pop(CASCADE_INFO_KEY, None)

        logger.info(
            "product_deleted",
            extra={"product_id": product_id, "movements_removed": removed},
        )
        return removed
