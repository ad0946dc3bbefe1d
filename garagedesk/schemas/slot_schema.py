"""Weekly time slot models."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from garagedesk.errors import ValidationError
from garagedesk.utils import normalize_time, parse_time

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class SlotOrigin(str, Enum):
    """Which slot set a window belongs to."""
    PREDEFINED = "predefined"
    CUSTOM = "custom"


class TimeSlot(BaseModel):
    """A recurring weekly window a garage can take bookings in."""

    id: str
    garage_id: str
    day_of_week: int = Field(ge=0, le=6)  # Sunday=0
    start_time: str
    end_time: str
    is_available: bool = True
    origin: SlotOrigin = SlotOrigin.PREDEFINED

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_time(value)

    @model_validator(mode="after")
    def _check_window(self) -> "TimeSlot":
        if parse_time(self.start_time) >= parse_time(self.end_time):
            raise ValidationError(
                f"Slot start {self.start_time} must be before end {self.end_time}"
            )
        return self

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    @property
    def label(self) -> str:
        return f"{self.start_time} - {self.end_time}"
