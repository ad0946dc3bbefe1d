"""
Availability resolver: the bookable slots for a garage on a date.

The resolver holds no state of its own. Each call reads the catalog and
the booking source afresh, so callers simply call again whenever they
are told the underlying data changed.

Two concurrent callers can both see the same slot as free. Exclusivity
is enforced when the booking is written, not here.
"""

import datetime as dt
import logging
from typing import Iterable, Optional, Protocol

from garagedesk.engine.conflicts import occupied_times
from garagedesk.engine.slot_catalog import SlotCatalog
from garagedesk.schemas.booking_schema import Booking
from garagedesk.schemas.slot_schema import TimeSlot
from garagedesk.utils import normalize_time

logger = logging.getLogger(__name__)


class BookingSource(Protocol):
    def list_bookings(
        self, garage_id: str, date: Optional[dt.date] = None
    ) -> list[Booking]: ...


def sunday_based_weekday(date: dt.date) -> int:
    """Weekday index with Sunday=0, matching the slot catalog."""
    return (date.weekday() + 1) % 7


def filter_available(candidates: Iterable[TimeSlot], occupied: set[str]) -> list[TimeSlot]:
    """Drop unavailable and occupied slots, preserving order."""
    return [s for s in candidates if s.is_available and s.start_time not in occupied]


class AvailabilityResolver:
    """Combines the slot catalog with current bookings."""

    def __init__(self, catalog: SlotCatalog, bookings: BookingSource) -> None:
        self.catalog = catalog
        self.bookings = bookings

    def available_slots(self, garage_id: str, date: dt.date) -> list[TimeSlot]:
        """Slots a customer can book at ``garage_id`` on ``date``.

        Past dates are not rejected here; an empty weekday yields ``[]``.
        """
        day_of_week = sunday_based_weekday(date)
        candidates = self.catalog.get_catalog(garage_id, day_of_week)
        occupied = occupied_times(
            self.bookings.list_bookings(garage_id, date), garage_id, date
        )
        result = filter_available(candidates, occupied)
        logger.debug(
            "Availability for %s on %s (day %d): %d of %d slots free",
            garage_id, date.isoformat(), day_of_week, len(result), len(candidates),
        )
        return result

    def is_bookable(self, garage_id: str, date: dt.date, time: str) -> bool:
        """True if some available slot on that date starts at ``time``."""
        start = normalize_time(time)
        return any(s.start_time == start for s in self.available_slots(garage_id, date))
