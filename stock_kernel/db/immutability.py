"""
ORM-Level Immutability Enforcement for the movement ledger.

===============================================================================
WHY THIS EXISTS
===============================================================================

The movement log is the explanation for every stock level.  If a movement
could be edited, stock would silently diverge from its history.  Movements
are therefore append-only:

    session.flush()
         |
         v
    [before_update event] --> _check_movement_update() --> ImmutabilityViolationError
         |
         v
    [before_delete event] --> _check_movement_delete() --> ImmutabilityViolationError
         |
         v
    SQL sent to database (only if checks pass)

===============================================================================
PROTECTED ENTITIES
===============================================================================

Entity    | When Immutable        | Exception
----------|-----------------------|-----------------------------------------
Movement  | ALWAYS (from insert)  | Set-based DELETE of a product's movements
          |                       | in delete_product_cascade / replace_all

===============================================================================
DESIGN DECISIONS
===============================================================================

1. WHY ARE SET-BASED DELETES ALLOWED?
   The cascade and the bulk replace remove movements with a single
   DELETE ... WHERE statement.  Mapper events do not fire for those, and
   they are the only two sanctioned removal paths.  Any per-object
   session.delete(movement) is a bug and is blocked here.

2. WHY INLINE IMPORTS?
   Avoids circular imports between db/ and models/.

===============================================================================
USAGE
===============================================================================

    from stock_kernel.db.immutability import register_immutability_listeners
    register_immutability_listeners()  # Called once at startup

===============================================================================
"""

from sqlalchemy import event

from stock_kernel.exceptions import ImmutabilityViolationError
from stock_kernel.logging_config import get_logger

logger = get_logger("db.immutability")


def _check_movement_update(mapper, connection, target):
    """Prevent any update to a Movement row."""
    logger.error(
        "immutability_violation_blocked",
        extra={
            "entity_type": "Movement",
            "entity_id": str(target.id),
            "operation": "UPDATE",
        },
    )
    raise ImmutabilityViolationError(
        entity_type="Movement",
        entity_id=str(target.id),
        reason="Stock movements are append-only and cannot be modified",
    )


def _check_movement_delete(mapper, connection, target):
    """Prevent per-row deletion of a Movement through the ORM."""
    logger.error(
        "immutability_violation_blocked",
        extra={
            "entity_type": "Movement",
            "entity_id": str(target.id),
            "operation": "DELETE",
        },
    )
    raise ImmutabilityViolationError(
        entity_type="Movement",
        entity_id=str(target.id),
        reason="Stock movements are removed only by the cascading product delete",
    )


def register_immutability_listeners():
    """
    Register the movement immutability listeners (idempotent).

    Call this after models are imported but before any database
    operations begin.
    """
    from stock_kernel.models.movement import Movement

    if not event.contains(Movement, "before_update", _check_movement_update):
        event.listen(Movement, "before_update", _check_movement_update)
    if not event.contains(Movement, "before_delete", _check_movement_delete):
        event.listen(Movement, "before_delete", _check_movement_delete)


def _safe_remove_listener(target, event_name, listener_fn):
    """Remove an event listener, ignoring it if not registered."""
    if event.contains(target, event_name, listener_fn):
        event.remove(target, event_name, listener_fn)


def unregister_immutability_listeners():
    """
    Remove the movement immutability listeners.

    WARNING: Only use this in tests.
    """
    from stock_kernel.models.movement import Movement

    _safe_remove_listener(Movement, "before_update", _check_movement_update)
    _safe_remove_listener(Movement, "before_delete", _check_movement_delete)
