"""
Garage dashboard backend wiring.

Bundles the slot catalog, store backends and engine into the
questions the dashboard and booking screens ask: which slots can be
booked, what is this garage's verification standing, and what has it earned.

Usage:
    backend = GarageBackend()
    backend.catalog.seed_predefined_week("garage-1")
    slots = backend.available_slots("garage-1", date(2025, 6, 2))
    status = backend.verification_status("garage-1")
    earned = backend.earnings_summary("garage-1")
"""

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from garagedesk.engine.availability import AvailabilityResolver
from garagedesk.engine.earnings import summarize
from garagedesk.engine.evidence import has_required_documents
from garagedesk.engine.slot_catalog import SlotCatalog
from garagedesk.engine.tier_classifier import classify_garage
from garagedesk.engine.verification_banner import Banner, select_banner
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.earnings_schema import EarningsSummary
from garagedesk.schemas.slot_schema import TimeSlot
from garagedesk.schemas.verification_schema import BankVerification, TierResult
from garagedesk.store.bank import BankRegistry
from garagedesk.store.bookings import BookingLedger
from garagedesk.store.documents import DocumentRegistry
from garagedesk.store.earnings import EarningsLedger
from garagedesk.store.notifications import NotificationOutbox
from garagedesk.store.services import ServiceCatalog

logger = get_garage_logger(__name__)


@dataclass(frozen=True)
class VerificationStatus:
    tier: TierResult
    banner: Banner
    bank: Optional[BankVerification]
    verified_documents: int


class GarageBackend:
    """In-memory stand-in for the hosted backend plus the decision engine."""

    def __init__(self, duplicate_policy: Optional[str] = None) -> None:
        self.catalog = SlotCatalog(duplicate_policy)
        self.services = ServiceCatalog()
        self.notifications = NotificationOutbox()
        self.bookings = BookingLedger(self.services, self.notifications, self.catalog)
        self.documents = DocumentRegistry()
        self.bank = BankRegistry()
        self.earnings = EarningsLedger()
        self.resolver = AvailabilityResolver(self.catalog, self.bookings)

    def available_slots(self, garage_id: str, date: dt.date) -> list[TimeSlot]:
        set_garage_id(garage_id)
        return self.resolver.available_slots(garage_id, date)

    def verification_status(self, garage_id: str) -> VerificationStatus:
        """Recompute tier and banner from the current evidence."""
        set_garage_id(garage_id)
        documents = self.documents.list_documents(garage_id)
        bank = self.bank.get_bank_verification(garage_id)
        tier = classify_garage(documents, bank)
        banner = select_banner(has_required_documents(documents), bank)
        logger.debug("Garage %s is %s, banner %s", garage_id, tier.tier.value, banner.kind.value)
        return VerificationStatus(
            tier=tier,
            banner=banner,
            bank=bank,
            verified_documents=sum(1 for d in documents if d.verified),
        )

    def earnings_summary(
        self, garage_id: str, now: Optional[dt.datetime] = None
    ) -> EarningsSummary:
        set_garage_id(garage_id)
        now = now or dt.datetime.now(dt.timezone.utc)
        return summarize(self.earnings.list_earnings(garage_id), now)

    def reset(self) -> None:
        """Clear every backend. Used by test fixtures for isolation."""
        self.catalog.reset()
        self.services.reset()
        self.notifications.reset()
        self.bookings.reset()
        self.documents.reset()
        self.bank.reset()
        self.earnings.reset()
