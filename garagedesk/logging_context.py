"""Garage ID logging context for tracing writes across store backends.

Provides a garage-aware logger that attaches the current garage ID to
every log record, so a single owner's session can be followed through
slot, booking and verification changes.

Usage:
    from garagedesk.logging_context import get_garage_logger, set_garage_id

    set_garage_id("garage-42")
    logger = get_garage_logger(__name__)
    logger.info("Slot toggled")  # record.garage_id == "garage-42"
"""

import logging
from contextvars import ContextVar

_garage_id: ContextVar[str] = ContextVar("garage_id", default="NO_GARAGE")


def set_garage_id(garage_id: str) -> None:
    """Set the garage ID for the current context."""
    _garage_id.set(garage_id)


def get_garage_id() -> str:
    """Retrieve the current garage ID."""
    return _garage_id.get()


class GarageIdFilter(logging.Filter):
    """Injects garage_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.garage_id = _garage_id.get()  # type: ignore[attr-defined]
        return True


def get_garage_logger(name: str) -> logging.Logger:
    """Return a logger with the GarageIdFilter attached.

    The filter adds ``garage_id`` to each record so formatters can
    include ``%(garage_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, GarageIdFilter) for f in logger.filters):
        logger.addFilter(GarageIdFilter())
    return logger
