"""
Weekly slot catalog: predefined and custom windows per garage.

Both slot sets live in one catalog and are toggled independently. In
production the two sets map to the hosted backend's
``predefined_time_slots`` and ``garage_time_slots`` tables; here they are
held in memory so the availability engine can run against a snapshot.

Usage:
    catalog = SlotCatalog()
    catalog.seed_predefined_week("garage-1")
    monday = catalog.get_catalog("garage-1", 1)
    catalog.set_availability(monday[0].id, False)
"""

import uuid
from datetime import datetime, timedelta
from typing import Iterable, Optional

from garagedesk.config import DUPLICATE_POLICIES, settings
from garagedesk.errors import NotFoundError, ValidationError
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.slot_schema import SlotOrigin, TimeSlot

logger = get_garage_logger(__name__)

_ORIGIN_ORDER = {SlotOrigin.PREDEFINED: 0, SlotOrigin.CUSTOM: 1}


def _new_slot_id() -> str:
    return f"TS-{uuid.uuid4().hex[:8].upper()}"


def order_slots(slots: Iterable[TimeSlot]) -> list[TimeSlot]:
    """Order by start time; predefined before custom on ties."""
    return sorted(slots, key=lambda s: (s.start_time, _ORIGIN_ORDER[s.origin]))


def dedupe_slots(slots: Iterable[TimeSlot]) -> list[TimeSlot]:
    """Keep one slot per (day_of_week, start_time).

    The first available slot wins; if none is available, the first slot.
    A disabled predefined window never hides an enabled custom one.
    """
    kept: dict[tuple[int, str], TimeSlot] = {}
    for slot in slots:
        key = (slot.day_of_week, slot.start_time)
        current = kept.get(key)
        if current is None or (slot.is_available and not current.is_available):
            kept[key] = slot
    return list(kept.values())


class SlotCatalog:
    """
    In-memory slot catalog for any number of garages.

    Lookups return copies, so a caller holding a previous result is not
    affected by later availability toggles.
    """

    def __init__(self, duplicate_policy: Optional[str] = None) -> None:
        policy = (duplicate_policy or settings.slots.duplicate_policy).lower()
        if policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_policy must be one of {DUPLICATE_POLICIES}, got {policy!r}"
            )
        self.duplicate_policy = policy
        self._slots: dict[str, TimeSlot] = {}

    def get_catalog(self, garage_id: str, day_of_week: int) -> list[TimeSlot]:
        """Return the garage's slots for one weekday, ordered by start time."""
        day_slots = order_slots(
            s for s in self._slots.values()
            if s.garage_id == garage_id and s.day_of_week == day_of_week
        )
        if self.duplicate_policy == "dedupe":
            day_slots = dedupe_slots(day_slots)
        return [s.model_copy() for s in day_slots]

    def get_slot(self, slot_id: str) -> TimeSlot:
        """Return a copy of a single slot.

        Raises:
            NotFoundError: If no slot has this ID.
        """
        return self._require(slot_id).model_copy()

    def list_slots(self, garage_id: str) -> list[TimeSlot]:
        """All slots of a garage, ordered by weekday then start time."""
        slots = [s for s in self._slots.values() if s.garage_id == garage_id]
        return [
            s.model_copy()
            for s in sorted(
                slots,
                key=lambda s: (s.day_of_week, s.start_time, _ORIGIN_ORDER[s.origin]),
            )
        ]

    def set_availability(self, slot_id: str, is_available: bool) -> None:
        """Toggle one slot. Takes effect for every later lookup.

        Raises:
            NotFoundError: If no slot has this ID.
        """
        slot = self._require(slot_id)
        set_garage_id(slot.garage_id)
        slot.is_available = is_available
        logger.info(
            "Slot %s (%s %s) set %s",
            slot_id, slot.day_name, slot.label,
            "available" if is_available else "unavailable",
        )

    def set_day_availability(
        self, garage_id: str, day_of_week: int, is_available: bool
    ) -> int:
        """Toggle every predefined slot of one weekday. Returns the count changed."""
        set_garage_id(garage_id)
        changed = 0
        for slot in self._slots.values():
            if (
                slot.garage_id == garage_id
                and slot.day_of_week == day_of_week
                and slot.origin == SlotOrigin.PREDEFINED
                and slot.is_available != is_available
            ):
                slot.is_available = is_available
                changed += 1
        logger.info(
            "Day %d for garage %s set %s (%d slots changed)",
            day_of_week, garage_id,
            "available" if is_available else "unavailable", changed,
        )
        return changed

    def add_slot(
        self,
        garage_id: str,
        day_of_week: int,
        start_time: str,
        end_time: str,
        origin: SlotOrigin = SlotOrigin.CUSTOM,
        is_available: bool = True,
    ) -> TimeSlot:
        """Create a slot.

        Raises:
            ValidationError: If the weekday is out of range or the window is empty.
        """
        set_garage_id(garage_id)
        if not 0 <= day_of_week <= 6:
            raise ValidationError(f"day_of_week must be 0-6, got {day_of_week}")
        slot = TimeSlot(
            id=_new_slot_id(),
            garage_id=garage_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            is_available=is_available,
            origin=origin,
        )
        self._slots[slot.id] = slot
        logger.info(
            "%s slot %s added for garage %s: %s %s",
            origin.value.capitalize(), slot.id, garage_id, slot.day_name, slot.label,
        )
        return slot.model_copy()

    def remove_custom_slot(self, slot_id: str) -> None:
        """Delete a custom slot. Predefined slots can only be toggled.

        Raises:
            NotFoundError: If no slot has this ID.
            ValidationError: If the slot is predefined.
        """
        slot = self._require(slot_id)
        set_garage_id(slot.garage_id)
        if slot.origin != SlotOrigin.CUSTOM:
            raise ValidationError(
                f"Slot {slot_id} is predefined and cannot be removed; toggle it instead"
            )
        del self._slots[slot_id]
        logger.info("Custom slot %s removed from garage %s", slot_id, slot.garage_id)

    def seed_predefined_week(self, garage_id: str) -> list[TimeSlot]:
        """Generate predefined windows for every open weekday from config."""
        cfg = settings.slots
        step = timedelta(minutes=cfg.slot_minutes)
        opening = datetime(2000, 1, 1, cfg.opening_hour)
        closing = datetime(2000, 1, 1) + timedelta(hours=cfg.closing_hour)

        created = []
        for day in range(7):
            if day in cfg.closed_days:
                continue
            start = opening
            while start + step <= closing:
                end = start + step
                created.append(self.add_slot(
                    garage_id,
                    day,
                    start.strftime("%H:%M"),
                    # A window ending at midnight is stored as 23:59
                    end.strftime("%H:%M") if end.day == start.day else "23:59",
                    origin=SlotOrigin.PREDEFINED,
                ))
                start = end
        logger.info("Seeded %d predefined slots for garage %s", len(created), garage_id)
        return created

    def reset(self) -> None:
        """Clear all slots. Used by test fixtures for isolation."""
        self._slots.clear()

    def _require(self, slot_id: str) -> TimeSlot:
        slot = self._slots.get(slot_id)
        if slot is None:
            raise NotFoundError(f"Time slot {slot_id} not found.")
        return slot
