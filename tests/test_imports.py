"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""

import logging


class TestSchemaImports:
    def test_import_slot_schema(self):
        from garagedesk.schemas.slot_schema import SlotOrigin, TimeSlot
        assert SlotOrigin.CUSTOM == "custom"
        assert TimeSlot is not None

    def test_import_booking_schema(self):
        from garagedesk.schemas.booking_schema import ACTIVE_STATUSES, BookingStatus
        assert BookingStatus.CANCELLED not in ACTIVE_STATUSES
        assert len(ACTIVE_STATUSES) == 3

    def test_import_verification_schema(self):
        from garagedesk.schemas.verification_schema import DocumentType, Evidence
        assert len(DocumentType) == 4
        assert Evidence().bank_verified is False


class TestEngineImports:
    def test_engine_reexports(self):
        from garagedesk.engine import (
            AvailabilityResolver,
            SlotCatalog,
            classify,
            occupied_times,
            select_banner,
        )
        assert callable(classify)
        assert callable(occupied_times)
        assert callable(select_banner)
        assert AvailabilityResolver(SlotCatalog(), None).catalog is not None


class TestStoreImports:
    def test_import_stores(self):
        from garagedesk.store.bank import BankRegistry
        from garagedesk.store.bookings import BookingLedger
        from garagedesk.store.documents import DocumentRegistry
        from garagedesk.store.earnings import EarningsLedger
        from garagedesk.store.notifications import NotificationOutbox
        from garagedesk.store.services import PREDEFINED_SERVICES, ServiceCatalog
        assert len(PREDEFINED_SERVICES) >= 6
        for cls in (
            BankRegistry, BookingLedger, DocumentRegistry,
            EarningsLedger, NotificationOutbox, ServiceCatalog,
        ):
            assert cls() is not None


class TestLoggingContext:
    def test_garage_id_attached_to_records(self, caplog):
        from garagedesk.logging_context import get_garage_logger, set_garage_id

        logger = get_garage_logger("garagedesk.test")
        set_garage_id("garage-42")
        with caplog.at_level(logging.INFO, logger="garagedesk.test"):
            logger.info("Slot toggled")
        assert caplog.records[-1].garage_id == "garage-42"

    def test_filter_attached_once(self):
        from garagedesk.logging_context import GarageIdFilter, get_garage_logger

        logger = get_garage_logger("garagedesk.test.once")
        get_garage_logger("garagedesk.test.once")
        assert sum(isinstance(f, GarageIdFilter) for f in logger.filters) == 1
