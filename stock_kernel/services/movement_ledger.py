"""
MovementLedger -- append-only write primitive for stock movements.

Responsibility:
    Inserts one Movement row per successful stock change, stamped with
    the injected clock.  Also owns the two set-based removal paths
    (cascade and bulk replace), which bypass the ORM immutability
    listeners on purpose.

Architecture position:
    Kernel > Services.  Flush-only.  Called from inside a
    StockLedgerEngine or BulkProductLoader transaction; inputs are assumed
    to be validated already.

Invariants enforced:
    - Append-only: rows are inserted, never updated.
    - kind is persisted as its string value ('entry' / 'exit').
"""

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.orm import Session

from stock_kernel.domain.clock import Clock, SystemClock
from stock_kernel.domain.dtos import MovementInfo
from stock_kernel.logging_config import get_logger
from stock_kernel.models.movement import Movement, MovementKind
from stock_kernel.services.base import BaseService

logger = get_logger("services.movement_ledger")


class MovementLedger(BaseService):
    """Append-only movement writer."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._clock = clock or SystemClock()

    def append(
        self,
        product_id: int,
        kind: MovementKind,
        quantity: int,
    ) -> MovementInfo:
        """Insert a movement and return its snapshot (id assigned on flush)."""
        movement = Movement(
            product_id=product_id,
            kind=MovementKind(kind).value,
            quantity=quantity,
            created_at=self._clock.now_utc(),
        )
        self.session.add(movement)
        self.session.flush()

        logger.debug(
            "movement_appended",
            extra={
                "movement_id": movement.id,
                "product_id": product_id,
                "kind": movement.kind,
                "quantity": quantity,
            },
        )
        return MovementInfo.from_model(movement)

    def delete_for_product(self, product_id: int) -> int:
        """Set-based DELETE of every movement of one product.  Returns the count."""
        result = self.session.execute(
            delete(Movement)
            .where(Movement.product_id == product_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_all(self) -> int:
        """Set-based DELETE of the whole movement log.  Returns the count."""
        result = self.session.execute(
            delete(Movement).execution_options(synchronize_session=False)
        )
        return result.rowcount
