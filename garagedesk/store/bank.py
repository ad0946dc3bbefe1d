"""
Bank verification registry, one record per garage.

In production this is the hosted backend's ``bank_verifications`` table.
Submitting details again replaces the record and puts it back to pending.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from garagedesk.config import settings
from garagedesk.errors import NotFoundError, ValidationError
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.verification_schema import BankStatus, BankVerification

logger = get_garage_logger(__name__)


class BankRegistry:
    """Bank details and their verification status, keyed by garage."""

    def __init__(self) -> None:
        self._records: dict[str, BankVerification] = {}

    def submit_bank_details(
        self,
        garage_id: str,
        bank_name: str,
        account_holder_name: str,
        account_type: str,
        account_number: str,
        account_number_confirm: str,
        ifsc_code: str,
    ) -> BankVerification:
        """Validate and store bank details with status pending.

        Raises:
            ValidationError: On missing fields, mismatched account numbers
                or a malformed IFSC code.
        """
        set_garage_id(garage_id)
        missing = [
            field_name
            for field_name, value in [
                ("bank_name", bank_name),
                ("account_holder_name", account_holder_name),
                ("account_type", account_type),
                ("account_number", account_number),
                ("ifsc_code", ifsc_code),
            ]
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(f"Missing bank details: {', '.join(missing)}.")

        account_number = account_number.strip()
        if account_number != account_number_confirm.strip():
            raise ValidationError("Account numbers do not match.")
        if not account_number.isdigit():
            raise ValidationError("Account number must be digits only.")
        if len(account_number) < settings.verification.min_account_digits:
            raise ValidationError(
                f"Account number must have at least "
                f"{settings.verification.min_account_digits} digits."
            )

        ifsc = ifsc_code.strip().upper()
        if not re.match(settings.verification.ifsc_pattern, ifsc):
            raise ValidationError(f"Invalid IFSC code {ifsc_code!r}.")

        record = BankVerification(
            garage_id=garage_id,
            status=BankStatus.PENDING,
            bank_name=bank_name.strip(),
            account_holder_name=account_holder_name.strip(),
            account_type=account_type.strip(),
            account_number=account_number,
            ifsc_code=ifsc,
            submitted_at=datetime.now(timezone.utc),
        )
        replaced = garage_id in self._records
        self._records[garage_id] = record
        logger.info(
            "Bank details %s for %s (account %s)",
            "resubmitted" if replaced else "submitted", garage_id,
            record.masked_account_number,
        )
        return record.model_copy()

    def set_status(
        self, garage_id: str, status: BankStatus, rejection_reason: Optional[str] = None
    ) -> BankVerification:
        """Apply a reviewer decision to the garage's bank record.

        Raises:
            NotFoundError: If the garage has not submitted bank details.
        """
        set_garage_id(garage_id)
        record = self._records.get(garage_id)
        if record is None:
            raise NotFoundError(f"No bank details submitted for garage {garage_id}.")
        record.status = status
        record.rejection_reason = rejection_reason if status == BankStatus.REJECTED else None
        logger.info("Bank verification for %s set to %s", garage_id, status.value)
        return record.model_copy()

    def get_bank_verification(self, garage_id: str) -> Optional[BankVerification]:
        """The garage's record, or None if nothing was submitted."""
        record = self._records.get(garage_id)
        return record.model_copy() if record else None

    def reset(self) -> None:
        self._records.clear()
