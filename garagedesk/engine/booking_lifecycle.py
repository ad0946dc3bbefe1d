"""
Booking status lifecycle with explicit transitions.

Every status change a garage owner makes must match a row in the
transition table; completed and cancelled bookings are terminal.

Usage:
    lifecycle = BookingLifecycle()
    lifecycle.transition(BookingTrigger.CONFIRM)
    assert lifecycle.current_status == BookingStatus.CONFIRMED
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from garagedesk.errors import ValidationError
from garagedesk.schemas.booking_schema import BookingStatus

logger = logging.getLogger(__name__)


class BookingTrigger(str, Enum):
    """Owner actions that move a booking between statuses."""
    CONFIRM = "confirm"
    START_WORK = "start_work"
    COMPLETE = "complete"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Transition:
    """A single valid status transition."""
    from_status: BookingStatus
    to_status: BookingStatus
    trigger: BookingTrigger


@dataclass(frozen=True)
class StatusEntry:
    """Recorded history entry for a status change."""
    status: BookingStatus
    entered_at: datetime
    trigger: Optional[BookingTrigger] = None


class InvalidTransitionError(ValidationError):
    """Raised when a status change is not valid from the current status."""


TERMINAL_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})


class BookingLifecycle:
    """Tracks one booking's status and rejects undefined transitions."""

    TRANSITIONS: list[Transition] = [
        Transition(BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingTrigger.CONFIRM),
        Transition(BookingStatus.PENDING, BookingStatus.CANCELLED, BookingTrigger.CANCEL),
        Transition(BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS, BookingTrigger.START_WORK),
        Transition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingTrigger.CANCEL),
        Transition(BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED, BookingTrigger.COMPLETE),
        Transition(BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED, BookingTrigger.CANCEL),
    ]

    def __init__(self, status: BookingStatus = BookingStatus.PENDING) -> None:
        self._current_status = status
        self._history: list[StatusEntry] = [
            StatusEntry(status=status, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_status(self) -> BookingStatus:
        return self._current_status

    def transition(self, trigger: BookingTrigger) -> BookingStatus:
        """
        Apply an owner action.

        Raises:
            InvalidTransitionError: If the trigger is not valid from the current status.
        """
        for t in self.TRANSITIONS:
            if t.from_status == self._current_status and t.trigger == trigger:
                return self._enter(t)

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_status.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def transition_to(self, status: BookingStatus) -> BookingStatus:
        """Move directly to ``status`` if a transition leads there."""
        for t in self.TRANSITIONS:
            if t.from_status == self._current_status and t.to_status == status:
                return self._enter(t)

        allowed = [t.to_status.value for t in self.TRANSITIONS
                   if t.from_status == self._current_status]
        raise InvalidTransitionError(
            f"Cannot move booking from '{self._current_status.value}' "
            f"to '{status.value}'. Allowed: {allowed}"
        )

    def get_valid_triggers(self) -> list[BookingTrigger]:
        """Return all triggers valid from the current status."""
        return [t.trigger for t in self.TRANSITIONS if t.from_status == self._current_status]

    def get_history(self) -> list[StatusEntry]:
        return list(self._history)

    def is_terminal(self) -> bool:
        return self._current_status in TERMINAL_STATUSES

    def _enter(self, t: Transition) -> BookingStatus:
        old_status = self._current_status
        self._current_status = t.to_status
        self._history.append(StatusEntry(
            status=t.to_status,
            entered_at=datetime.now(timezone.utc),
            trigger=t.trigger,
        ))
        logger.debug(
            "Booking status: %s -> %s (trigger: %s)",
            old_status.value, t.to_status.value, t.trigger.value,
        )
        return self._current_status
