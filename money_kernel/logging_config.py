"""Structured JSON logging for the money kernel and its configuration layer."""

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
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

# Scoped fields stamped onto every record. The config layer binds
# config_source / config_checksum while it resolves a policy.
_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"money_log_{name}", default=None)
    for name in ("correlation_id", "config_source", "config_checksum")
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _CONTEXT_VARS[name]
    except KeyError:
        raise TypeError(f"Unknown log context field: {name!r}") from None


class LogContext:
    """Thread-safe / async-safe context holder for scoped log fields."""

    FIELDS: tuple[str, ...] = tuple(_CONTEXT_VARS)

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Set context fields. None values are skipped; unknown names raise TypeError."""
        for name, val in fields.items():
            var = _context_var(name)
            if val is not None:
                var.set(val)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        """Return all non-None context fields as a dict."""
        return {
            name: val
            for name, var in _CONTEXT_VARS.items()
            if (val := var.get()) is not None
        }

    @classmethod
    def clear(cls) -> None:
        """Reset all context fields to None."""
        for var in _CONTEXT_VARS.values():
            var.set(None)

    @classmethod
    def bind(cls, **fields: str | None) -> "_BoundContext":
        """Context manager that sets fields on entry and restores on exit."""
        for name in fields:
            _context_var(name)
        return _BoundContext(fields)


class _BoundContext:
    """Context manager returned by LogContext.bind()."""

    def __init__(self, fields: dict[str, str | None]):
        self._fields = fields
        self._tokens: list[tuple[ContextVar[str | None], Token]] = []

    def __enter__(self) -> type[LogContext]:
        for name, val in self._fields.items():
            if val is not None:
                var = _CONTEXT_VARS[name]
                self._tokens.append((var, var.set(val)))
        return LogContext

    def __exit__(self, *exc: Any) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)


# ---------------------------------------------------------------------------
# JSON Formatter
# ---------------------------------------------------------------------------

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class _JSONEncoder(json.JSONEncoder):
    """Render Decimal, datetime and value objects as text, never as float."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        # Decimal, Numeral, Money and anything else: their text form
        return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    """exc_* fields for a logged exception.

    Kernel and config errors contribute their ``code`` and their structured
    attributes (``amount``, ``dividend``, ``source`` ...).
    """
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    fields.update(
        (f"exc_{name}", val)
        for name, val in vars(exc).items()
        if not name.startswith("_") and name != "code"
    )
    return fields


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line.

    Order of precedence: envelope, then LogContext fields, then ``extra``
    keys that do not collide with either, then exception fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS:
                payload.setdefault(key, val)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, cls=_JSONEncoder)


# ---------------------------------------------------------------------------
# Logger factory
# ---------------------------------------------------------------------------

_LOGGER_PREFIX = "money_kernel"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the money_kernel namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

_installed: logging.Handler | None = None
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> logging.Handler:
    """Install one JSON handler on the money_kernel logger (idempotent).

    ``level`` may be a number or a level name ("DEBUG"). A second call
    returns the handler installed by the first and changes nothing.
    """
    global _installed
    with _lock:
        if _installed is not None:
            return _installed
        installed = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
        installed.setFormatter(StructuredFormatter())

        logger = logging.getLogger(_LOGGER_PREFIX)
        logger.setLevel(level)
        logger.propagate = False
        logger.addHandler(installed)
        _installed = installed
        return installed


def reset_logging() -> None:
    """Remove the installed handler and restore propagation. FOR TESTING ONLY."""
    global _installed
    with _lock:
        logger = logging.getLogger(_LOGGER_PREFIX)
        if _installed is not None:
            logger.removeHandler(_installed)
            _installed = None
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
