from garagedesk.engine.availability import AvailabilityResolver
from garagedesk.engine.booking_lifecycle import BookingLifecycle, BookingTrigger
from garagedesk.engine.conflicts import occupied_times
from garagedesk.engine.earnings import summarize
from garagedesk.engine.evidence import (
    bank_verified,
    collect_evidence,
    has_required_documents,
    has_verified,
)
from garagedesk.engine.slot_catalog import SlotCatalog
from garagedesk.engine.tier_classifier import classify, classify_garage, tier_rank
from garagedesk.engine.verification_banner import BannerKind, select_banner

__all__ = [
    "AvailabilityResolver",
    "BookingLifecycle",
    "BookingTrigger",
    "SlotCatalog",
    "occupied_times",
    "summarize",
    "has_verified",
    "bank_verified",
    "collect_evidence",
    "has_required_documents",
    "classify",
    "classify_garage",
    "tier_rank",
    "BannerKind",
    "select_banner",
]
