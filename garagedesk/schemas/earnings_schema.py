"""Payment records and the earnings summary built from them."""

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field


class Earning(BaseModel):
    """One payment received by a garage, usually for a booking."""

    id: str
    garage_id: str
    amount: float = Field(ge=0)
    booking_id: Optional[str] = None
    payment_method: Optional[str] = None
    status: str = "completed"
    transaction_date: Optional[dt.datetime] = None


@dataclass(frozen=True)
class DailyEarnings:
    day: dt.date
    amount: float


@dataclass(frozen=True)
class EarningsSummary:
    total: float
    last_30_days: float
    last_7_days: float
    average_transaction: float
    transaction_count: int
    daily: tuple[DailyEarnings, ...]
