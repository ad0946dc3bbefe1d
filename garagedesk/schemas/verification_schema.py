"""Verification evidence and tier models."""

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class DocumentType(str, Enum):
    IDENTITY_PROOF = "identity_proof"
    GARAGE_PHOTO = "garage_photo"
    ADDRESS_PROOF = "address_proof"
    BUSINESS_PROOF = "business_proof"


class BankStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class VerificationTier(str, Enum):
    """Trust level derived from evidence. Never stored."""
    UNVERIFIED = "unverified"
    PROVISIONAL = "provisional"
    VERIFIED = "verified"
    CERTIFIED = "certified"


class GarageDocument(BaseModel):
    """An uploaded verification document and its review outcome."""

    id: str
    garage_id: str
    document_type: DocumentType
    file_url: str = ""
    verified: bool = False
    rejection_reason: Optional[str] = None
    uploaded_at: Optional[dt.datetime] = None


class BankVerification(BaseModel):
    """Bank account details submitted for payouts. One per garage."""

    garage_id: str
    status: BankStatus = BankStatus.PENDING
    bank_name: str = ""
    account_holder_name: str = ""
    account_type: str = ""
    account_number: str = ""
    ifsc_code: str = ""
    rejection_reason: Optional[str] = None
    submitted_at: Optional[dt.datetime] = None

    @property
    def masked_account_number(self) -> str:
        return "*" * max(len(self.account_number) - 4, 0) + self.account_number[-4:]


@dataclass(frozen=True)
class Evidence:
    """Boolean facts the tier classifier decides on."""

    has_identity: bool = False
    has_garage_photo: bool = False
    has_address: bool = False
    has_business: bool = False
    bank_verified: bool = False


@dataclass(frozen=True)
class TierResult:
    """Classifier output: tier plus its static benefits."""

    tier: VerificationTier
    label: str
    benefits: str
    badge_color: str
    payouts_enabled: bool
