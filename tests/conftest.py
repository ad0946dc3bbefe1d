"""Shared test fixtures and helpers."""

from datetime import date, datetime, timezone
from typing import Optional

import pytest

from garagedesk.dashboard import GarageBackend
from garagedesk.engine.slot_catalog import SlotCatalog
from garagedesk.schemas.booking_schema import Booking, BookingStatus
from garagedesk.schemas.slot_schema import SlotOrigin
from garagedesk.schemas.verification_schema import (
    BankStatus,
    BankVerification,
    DocumentType,
    GarageDocument,
)

GARAGE_ID = "garage-1"
OTHER_GARAGE_ID = "garage-2"
# 2025-06-02 is a Monday (day_of_week=1 with Sunday=0)
MONDAY = date(2025, 6, 2)


@pytest.fixture
def catalog():
    return SlotCatalog()


@pytest.fixture
def monday_catalog(catalog):
    """Catalog with a single available Monday 09:00-10:00 slot."""
    catalog.add_slot(GARAGE_ID, 1, "09:00", "10:00", origin=SlotOrigin.PREDEFINED)
    return catalog


@pytest.fixture
def backend():
    return GarageBackend()


@pytest.fixture
def seeded_backend(backend):
    """Backend with a predefined week and one priced service."""
    backend.catalog.seed_predefined_week(GARAGE_ID)
    backend.services.add_service(GARAGE_ID, "Oil Change", 799.0)
    return backend


def service_id_for(
    backend: GarageBackend, name: str = "Oil Change", garage_id: str = GARAGE_ID
) -> str:
    return next(s.id for s in backend.services.list_services(garage_id) if s.name == name)


def make_booking(
    time: str = "09:00",
    status: BookingStatus = BookingStatus.CONFIRMED,
    booking_date: date = MONDAY,
    garage_id: str = GARAGE_ID,
    booking_id: Optional[str] = None,
) -> Booking:
    """Helper to create a Booking without going through a ledger."""
    return Booking(
        id=booking_id or f"BK-{time.replace(':', '')}-{status.value}",
        garage_id=garage_id,
        service_ids=["SV-TEST"],
        date=booking_date,
        time=time,
        status=status,
        customer_name="Ravi Kumar",
        customer_phone="9876543210",
        total_amount=500.0,
        created_at=datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc),
    )


def make_document(
    document_type: DocumentType,
    verified: bool = True,
    garage_id: str = GARAGE_ID,
) -> GarageDocument:
    return GarageDocument(
        id=f"DOC-{document_type.value}-{verified}",
        garage_id=garage_id,
        document_type=document_type,
        verified=verified,
    )


def make_bank(status: BankStatus, garage_id: str = GARAGE_ID) -> BankVerification:
    return BankVerification(garage_id=garage_id, status=status, account_number="123456789012")


class StaticBookings:
    """Booking source over a fixed list, for resolver tests."""

    def __init__(self, bookings: Optional[list[Booking]] = None) -> None:
        self.bookings = list(bookings or [])

    def list_bookings(self, garage_id: str, date: Optional[date] = None) -> list[Booking]:
        return [
            b for b in self.bookings
            if b.garage_id == garage_id and (date is None or b.date == date)
        ]
