"""Which verification prompt the dashboard shows a garage owner."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from garagedesk.schemas.verification_schema import BankStatus, BankVerification


class BannerKind(str, Enum):
    UPLOAD_DOCUMENTS = "upload_documents"
    ADD_BANK_DETAILS = "add_bank_details"
    BANK_PENDING = "bank_pending"
    BANK_REJECTED = "bank_rejected"
    STATUS = "status"


@dataclass(frozen=True)
class Banner:
    kind: BannerKind
    title: str
    message: str


BANNERS: dict[BannerKind, Banner] = {
    BannerKind.UPLOAD_DOCUMENTS: Banner(
        BannerKind.UPLOAD_DOCUMENTS,
        "Complete Your Verification",
        "Upload documents to verify your garage and start earning.",
    ),
    BannerKind.ADD_BANK_DETAILS: Banner(
        BannerKind.ADD_BANK_DETAILS,
        "Add Bank Details",
        "Add bank account details to enable payouts.",
    ),
    BannerKind.BANK_PENDING: Banner(
        BannerKind.BANK_PENDING,
        "Bank Verification in Progress",
        "Your bank details are being verified. This usually takes 1-2 business days.",
    ),
    BannerKind.BANK_REJECTED: Banner(
        BannerKind.BANK_REJECTED,
        "Bank Verification Failed",
        "Please re-upload your bank details with correct information.",
    ),
    BannerKind.STATUS: Banner(BannerKind.STATUS, "Verification Status", ""),
}


def select_banner(has_documents: bool, bank_record: Optional[BankVerification]) -> Banner:
    """First match wins: documents, then bank details, then bank status."""
    if not has_documents:
        return BANNERS[BannerKind.UPLOAD_DOCUMENTS]
    if bank_record is None:
        return BANNERS[BannerKind.ADD_BANK_DETAILS]
    if bank_record.status == BankStatus.PENDING:
        return BANNERS[BannerKind.BANK_PENDING]
    if bank_record.status == BankStatus.REJECTED:
        return BANNERS[BannerKind.BANK_REJECTED]
    return BANNERS[BannerKind.STATUS]
