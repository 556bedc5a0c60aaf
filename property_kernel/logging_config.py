"""
Structured JSON logging for the property kernel.

Every record under the ``property_kernel`` logger tree is rendered as one
JSON object per line.  Request-scoped fields (correlation id, the contract
or payment being processed) live in context variables and are merged into
each record, so engines and services log plain snake_case event names with
``extra`` fields and never thread identifiers through their signatures.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from typing import Any

_LOGGER_PREFIX = "property_kernel"

CONTEXT_FIELDS = (
    "correlation_id",
    "actor_id",
    "entity_type",
    "entity_id",
    "contract_id",
    "payment_id",
)

_context_vars: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"log_{name}", default=None) for name in CONTEXT_FIELDS
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _context_vars[name]
    except KeyError:
        raise TypeError(f"Unknown log context field: {name}") from None


class LogContext:
    """Request-scoped log fields, safe across threads and tasks."""

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Set context fields; ``None`` values leave the field untouched."""
        for name, val in fields.items():
            var = _context_var(name)
            if val is not None:
                var.set(val)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return {
            name: var.get()
            for name, var in _context_vars.items()
            if var.get() is not None
        }

    @classmethod
    def clear(cls) -> None:
        for var in _context_vars.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[type["LogContext"]]:
        """Set fields for the duration of a ``with`` block, then restore them."""
        tokens = [
            (_context_var(name), _context_var(name).set(val))
            for name, val in fields.items()
            if val is not None
        ]
        try:
            yield LogContext
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    # Decimal, UUID and anything else render as their string form
    return str(obj)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: fixed header, context, extras, exception."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, val in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, val)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception_fields(record))

        return json.dumps(payload, default=_json_default)

    def _exception_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        exc = record.exc_info[1]
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # PropertyKernelError subclasses keep their context as attributes
        fields.update(
            (f"exc_{name}", val)
            for name, val in vars(exc).items()
            if not name.startswith("_")
        )
        fields["traceback"] = self.formatException(record.exc_info)
        return fields


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``property_kernel`` namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach the JSON handler to the ``property_kernel`` tree once per process."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())

    tree = logging.getLogger(_LOGGER_PREFIX)
    tree.setLevel(level)
    tree.propagate = False
    tree.addHandler(handler)


def reset_logging() -> None:
    """Undo ``configure_logging``; used by the test suite."""
    global _configured
    with _lock:
        _configured = False
    tree = logging.getLogger(_LOGGER_PREFIX)
    tree.handlers.clear()
    tree.setLevel(logging.WARNING)
