"""
In-memory earnings ledger.

In production payments are rows in the hosted backend's ``earnings``
table, written by the payment flow. Here they are recorded directly so
the summary can be computed against a snapshot.
"""

import datetime as dt
import uuid
from typing import Optional

from garagedesk.errors import ValidationError
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.earnings_schema import Earning

logger = get_garage_logger(__name__)

_UNDATED = dt.datetime.min.replace(tzinfo=dt.timezone.utc)


class EarningsLedger:
    """Payments received, for all garages."""

    def __init__(self) -> None:
        self._earnings: dict[str, Earning] = {}

    def record_earning(
        self,
        garage_id: str,
        amount: float,
        booking_id: Optional[str] = None,
        payment_method: Optional[str] = None,
        status: str = "completed",
        transaction_date: Optional[dt.datetime] = None,
    ) -> Earning:
        """Record a payment. The transaction date defaults to now (UTC).

        Raises:
            ValidationError: If the amount is negative.
        """
        set_garage_id(garage_id)
        if amount < 0:
            raise ValidationError(f"Earning amount must be >= 0, got {amount}")
        earning = Earning(
            id=f"ER-{uuid.uuid4().hex[:8].upper()}",
            garage_id=garage_id,
            amount=amount,
            booking_id=booking_id,
            payment_method=payment_method,
            status=status,
            transaction_date=transaction_date or dt.datetime.now(dt.timezone.utc),
        )
        self._earnings[earning.id] = earning
        logger.info("Earning recorded: %s %.2f for %s (booking %s)",
                    earning.id, amount, garage_id, booking_id or "-")
        return earning.model_copy()

    def list_earnings(self, garage_id: str) -> list[Earning]:
        """A garage's earnings, newest transaction first."""
        items = [e for e in self._earnings.values() if e.garage_id == garage_id]
        items.sort(key=lambda e: e.transaction_date or _UNDATED, reverse=True)
        return [e.model_copy() for e in items]

    def reset(self) -> None:
        self._earnings.clear()
