"""Collects the boolean verification facts for a garage."""

from typing import Iterable, Optional

from garagedesk.schemas.verification_schema import (
    BankStatus,
    BankVerification,
    DocumentType,
    Evidence,
    GarageDocument,
)


def has_verified(
    documents: Optional[Iterable[GarageDocument]], document_type: DocumentType
) -> bool:
    """True if any document of this type has been verified."""
    return any(
        d.document_type == document_type and d.verified for d in (documents or ())
    )


def bank_verified(bank_record: Optional[BankVerification]) -> bool:
    return bank_record is not None and bank_record.status == BankStatus.VERIFIED


def collect_evidence(
    documents: Optional[Iterable[GarageDocument]],
    bank_record: Optional[BankVerification],
) -> Evidence:
    """Bundle document and bank facts. Missing inputs count as unverified."""
    docs = list(documents or ())
    return Evidence(
        has_identity=has_verified(docs, DocumentType.IDENTITY_PROOF),
        has_garage_photo=has_verified(docs, DocumentType.GARAGE_PHOTO),
        has_address=has_verified(docs, DocumentType.ADDRESS_PROOF),
        has_business=has_verified(docs, DocumentType.BUSINESS_PROOF),
        bank_verified=bank_verified(bank_record),
    )


def has_required_documents(documents: Optional[Iterable[GarageDocument]]) -> bool:
    """Identity proof and garage photo are both verified."""
    docs = list(documents or ())
    return has_verified(docs, DocumentType.IDENTITY_PROOF) and has_verified(
        docs, DocumentType.GARAGE_PHOTO
    )
