"""
In-memory booking ledger.

In production bookings are rows in the hosted backend's ``bookings`` table,
guarded by a unique index on (garage_id, booking_date, booking_time) over
non-cancelled rows. The ledger enforces the same constraint under a lock,
so reading availability and then inserting can never double-book a slot.
"""

import datetime as dt
import threading
import uuid
from typing import Iterable, Optional

from garagedesk.config import settings
from garagedesk.engine.availability import AvailabilityResolver
from garagedesk.engine.booking_lifecycle import BookingLifecycle, StatusEntry
from garagedesk.engine.slot_catalog import SlotCatalog
from garagedesk.errors import NotFoundError, SlotConflictError, ValidationError
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.booking_schema import ACTIVE_STATUSES, Booking, BookingStatus
from garagedesk.store.notifications import NotificationOutbox
from garagedesk.store.services import ServiceCatalog
from garagedesk.utils import normalize_phone, normalize_time

logger = get_garage_logger(__name__)


class BookingLedger:
    """
    Stores bookings and applies status changes through BookingLifecycle.

    When a slot catalog is supplied, new and rescheduled bookings must
    also land on an available catalog slot.
    """

    def __init__(
        self,
        services: Optional[ServiceCatalog] = None,
        notifications: Optional[NotificationOutbox] = None,
        catalog: Optional[SlotCatalog] = None,
    ) -> None:
        self.services = services or ServiceCatalog()
        self.notifications = notifications or NotificationOutbox()
        self._resolver = AvailabilityResolver(catalog, self) if catalog else None
        self._bookings: dict[str, Booking] = {}
        self._lifecycles: dict[str, BookingLifecycle] = {}
        self._lock = threading.Lock()

    def create_booking(
        self,
        garage_id: str,
        date: dt.date,
        time: str,
        customer_name: str,
        customer_phone: str,
        service_ids: Iterable[str] = (),
        customer_email: Optional[str] = None,
        vehicle_make: Optional[str] = None,
        vehicle_model: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Booking:
        """Create a pending booking and notify the garage.

        Raises:
            ValidationError: If required fields are missing or too many services.
            NotFoundError: If a selected service is unknown.
            SlotConflictError: If the slot is already taken or not offered.
        """
        set_garage_id(garage_id)
        service_ids = list(dict.fromkeys(service_ids))
        missing = [
            field_name
            for field_name, value in [
                ("garage_id", garage_id),
                ("time", time),
                ("customer_name", customer_name),
                ("customer_phone", customer_phone),
            ]
            if not value or not value.strip()
        ]
        if not service_ids:
            missing.append("service_ids")
        if missing:
            raise ValidationError(
                f"Cannot create booking - missing required fields: {', '.join(missing)}."
            )
        if len(customer_name.strip()) < settings.booking.min_name_length:
            raise ValidationError(f"Customer name {customer_name!r} is too short.")
        if len(service_ids) > settings.booking.max_services_per_booking:
            raise ValidationError(
                f"At most {settings.booking.max_services_per_booking} services per booking, "
                f"got {len(service_ids)}."
            )

        start = normalize_time(time)
        total = self.services.total_for(garage_id, service_ids)

        with self._lock:
            self._check_slot_free(garage_id, date, start)
            booking = Booking(
                id=f"BK-{uuid.uuid4().hex[:6].upper()}",
                garage_id=garage_id,
                service_ids=service_ids,
                date=date,
                time=start,
                status=BookingStatus.PENDING,
                customer_name=customer_name.strip(),
                customer_phone=normalize_phone(customer_phone),
                customer_email=customer_email,
                vehicle_make=vehicle_make,
                vehicle_model=vehicle_model,
                notes=notes,
                total_amount=total,
                created_at=dt.datetime.now(dt.timezone.utc),
            )
            self._bookings[booking.id] = booking
            self._lifecycles[booking.id] = BookingLifecycle(booking.status)

        logger.info(
            "Booking created: %s for %s at %s on %s %s (%.2f %s)",
            booking.id, booking.customer_name, garage_id, date.isoformat(), start,
            total, settings.booking.currency,
        )
        self.notifications.notify_booking_created(booking)
        return booking.model_copy()

    def update_status(self, booking_id: str, status: BookingStatus) -> Booking:
        """Move a booking to a new status.

        Raises:
            NotFoundError: If the booking is unknown.
            InvalidTransitionError: If the lifecycle does not allow the change.
        """
        booking = self._require(booking_id)
        set_garage_id(booking.garage_id)
        self._lifecycles[booking_id].transition_to(status)
        booking.status = status
        logger.info("Booking %s status updated to %s", booking_id, status.value)
        return booking.model_copy()

    def cancel_booking(self, booking_id: str) -> Booking:
        return self.update_status(booking_id, BookingStatus.CANCELLED)

    def reschedule_booking(self, booking_id: str, new_date: dt.date, new_time: str) -> Booking:
        """Move an active booking to another slot.

        Raises:
            NotFoundError: If the booking is unknown.
            ValidationError: If the booking is completed or cancelled.
            SlotConflictError: If the target slot is taken or not offered.
        """
        booking = self._require(booking_id)
        set_garage_id(booking.garage_id)
        if booking.status not in ACTIVE_STATUSES:
            raise ValidationError(
                f"Booking {booking_id} is {booking.status.value} and cannot be rescheduled."
            )
        start = normalize_time(new_time)
        if (booking.date, booking.time) == (new_date, start):
            return booking.model_copy()
        with self._lock:
            self._check_slot_free(booking.garage_id, new_date, start, ignore_id=booking_id)
            booking.date = new_date
            booking.time = start
        logger.info("Booking rescheduled: %s to %s %s", booking_id, new_date.isoformat(), start)
        return booking.model_copy()

    def get_booking(self, booking_id: str) -> Booking:
        return self._require(booking_id).model_copy()

    def get_status_history(self, booking_id: str) -> list[StatusEntry]:
        self._require(booking_id)
        return self._lifecycles[booking_id].get_history()

    def list_bookings(self, garage_id: str, date: Optional[dt.date] = None) -> list[Booking]:
        """Bookings for a garage, optionally on one date, ordered by date and time."""
        matches = [
            b for b in self._bookings.values()
            if b.garage_id == garage_id and (date is None or b.date == date)
        ]
        return [b.model_copy() for b in sorted(matches, key=lambda b: (b.date, b.time))]

    def reset(self) -> None:
        """Clear all bookings. Used by test fixtures for isolation."""
        self._bookings.clear()
        self._lifecycles.clear()

    def _check_slot_free(
        self, garage_id: str, date: dt.date, start: str, ignore_id: Optional[str] = None
    ) -> None:
        for other in self._bookings.values():
            if (
                other.id != ignore_id
                and other.garage_id == garage_id
                and other.date == date
                and other.time == start
                and other.status in ACTIVE_STATUSES
            ):
                logger.warning(
                    "Rejected booking for %s on %s %s: held by %s",
                    garage_id, date.isoformat(), start, other.id,
                )
                raise SlotConflictError(
                    f"Slot {start} on {date.isoformat()} is already booked."
                )
        if self._resolver is not None and not self._resolver.is_bookable(garage_id, date, start):
            logger.warning(
                "Rejected booking for %s on %s %s: no available slot",
                garage_id, date.isoformat(), start,
            )
            raise SlotConflictError(
                f"No available slot starts at {start} on {date.isoformat()}."
            )

    def _require(self, booking_id: str) -> Booking:
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found.")
        return booking
