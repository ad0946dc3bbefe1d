"""Booking conflict filter: which slot start times are taken on a date."""

import datetime as dt
from typing import Iterable

from garagedesk.schemas.booking_schema import ACTIVE_STATUSES, Booking


def occupied_times(bookings: Iterable[Booking], garage_id: str, date: dt.date) -> set[str]:
    """Start times held by pending, confirmed or in-progress bookings.

    Completed and cancelled bookings never occupy a slot.
    """
    return {
        b.time
        for b in bookings
        if b.garage_id == garage_id and b.date == date and b.status in ACTIVE_STATUSES
    }
