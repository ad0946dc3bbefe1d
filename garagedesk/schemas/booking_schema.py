"""Booking, service and notification data models."""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from garagedesk.utils import normalize_time


class BookingStatus(str, Enum):
    """Lifecycle status of a booking."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that hold a slot on their date
ACTIVE_STATUSES = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS}
)


class Booking(BaseModel):
    """A customer booking against one slot start time on one date."""

    id: str
    garage_id: str
    service_ids: list[str] = Field(default_factory=list)
    date: dt.date
    time: str
    status: BookingStatus = BookingStatus.PENDING
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    notes: Optional[str] = None
    total_amount: float = 0.0
    created_at: Optional[dt.datetime] = None

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, value: str) -> str:
        return normalize_time(value)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class GarageService(BaseModel):
    """A service a garage offers, priced by the owner."""

    id: str
    garage_id: str
    name: str
    category: str = "General"
    price: float = Field(ge=0)


class Notification(BaseModel):
    """Dashboard notification raised for a garage owner."""

    id: str
    garage_id: str
    booking_id: Optional[str] = None
    title: str
    message: str
    created_at: dt.datetime
    read: bool = False
