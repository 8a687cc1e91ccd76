"""
Structured JSON logging for the stock kernel.

Every record under the ``stock_kernel`` logger is rendered as one JSON
object per line::

    {"ts": "...", "level": "WARNING", "logger": "stock_kernel.services.stock_ledger",
     "message": "stock_operation_rejected", "correlation_id": "3f9c0a1b2d4e",
     "operation": "apply_exit", "product_id": 7,
     "error_code": "INSUFFICIENT_STOCK_OR_NOT_FOUND", ...}

Fields come from three places, later ones winning:

1. the envelope (ts, level, logger, message);
2. ``LogContext``: fields bound for the current unit of work.  The ledger
   engine binds ``correlation_id``, ``operation`` and ``product_id`` for
   each transaction; the interactive CLI binds a ``correlation_id`` and the
   menu ``command`` for each menu choice, so every record of one command
   shares an id;
3. the ``extra=`` mapping of the logging call.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "new_correlation_id",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

_LOGGER_PREFIX = "stock_kernel"

_EMPTY: Mapping[str, Any] = MappingProxyType({})
_context: ContextVar[Mapping[str, Any]] = ContextVar("stock_log_context", default=_EMPTY)


def new_correlation_id() -> str:
    """Short random id shared by every record of one unit of work."""
    return uuid.uuid4().hex[:12]


class LogContext:
    """Fields attached to every record logged in the current context.

    Backed by a ContextVar, so each thread (and each asyncio task) sees its
    own fields.  Values keep their type; ``product_id`` stays an int.
    """

    @staticmethod
    def current() -> Mapping[str, Any]:
        return _context.get()

    @staticmethod
    def get(name: str, default: Any = None) -> Any:
        return _context.get().get(name, default)

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[Mapping[str, Any]]:
        """Add ``fields`` (None values skipped) until the block exits."""
        merged = dict(_context.get())
        merged.update({k: v for k, v in fields.items() if v is not None})
        token = _context.set(MappingProxyType(merged))
        try:
            yield _context.get()
        finally:
            _context.reset(token)

    @staticmethod
    def clear() -> None:
        _context.set(_EMPTY)


# Attributes every LogRecord has; anything else on a record came from extra=.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _to_json(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


class StructuredFormatter(logging.Formatter):
    """One JSON line per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.current())
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        )

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)
            code = getattr(exc, "code", None)
            if isinstance(code, str):
                payload.setdefault("error_code", code)
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Logger under the stock_kernel namespace, e.g. ``get_logger("cli")``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_lock = threading.Lock()
_installed: logging.Handler | None = None


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one JSON handler to the ``stock_kernel`` logger.

    Only the first call has an effect; later calls return without touching
    the level or the handlers.  ``handler`` (for example a file handler)
    takes precedence over ``stream``, which defaults to stderr.
    """
    global _installed
    with _lock:
        if _installed is not None:
            return
        installed = handler or logging.StreamHandler(stream or sys.stderr)
        installed.setFormatter(StructuredFormatter())
        root = logging.getLogger(_LOGGER_PREFIX)
        root.setLevel(level)
        root.propagate = False
        root.addHandler(installed)
        _installed = installed


def reset_logging() -> None:
    """Detach the handler installed by configure_logging. For tests."""
    global _installed
    with _lock:
        root = logging.getLogger(_LOGGER_PREFIX)
        if _installed is not None:
            root.removeHandler(_installed)
            _installed.close()
            _installed = None
        root.setLevel(logging.WARNING)
