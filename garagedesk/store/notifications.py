"""
Owner notification outbox.

In production a database trigger calls the ``create-booking-notification``
function and push delivery happens downstream. Here notifications are kept
in memory so the booking flow can be exercised end to end.
"""

import uuid
from datetime import datetime, timezone

from garagedesk.errors import NotFoundError
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.booking_schema import Booking, Notification

logger = get_garage_logger(__name__)


class NotificationOutbox:
    """Notifications per garage, newest first on listing."""

    def __init__(self) -> None:
        self._notifications: dict[str, Notification] = {}

    def notify_booking_created(self, booking: Booking) -> Notification:
        set_garage_id(booking.garage_id)
        notification = Notification(
            id=f"NT-{uuid.uuid4().hex[:8].upper()}",
            garage_id=booking.garage_id,
            booking_id=booking.id,
            title="New Booking",
            message=(
                f"{booking.customer_name} booked {booking.date.isoformat()} "
                f"at {booking.time}."
            ),
            created_at=datetime.now(timezone.utc),
        )
        self._notifications[notification.id] = notification
        logger.info("Creating notification for booking: %s", booking.id)
        return notification.model_copy()

    def list_for(self, garage_id: str, unread_only: bool = False) -> list[Notification]:
        items = [
            n for n in self._notifications.values()
            if n.garage_id == garage_id and not (unread_only and n.read)
        ]
        return [n.model_copy() for n in sorted(items, key=lambda n: n.created_at, reverse=True)]

    def mark_read(self, notification_id: str) -> None:
        notification = self._notifications.get(notification_id)
        if notification is None:
            raise NotFoundError(f"Notification {notification_id} not found.")
        notification.read = True

    def reset(self) -> None:
        self._notifications.clear()
