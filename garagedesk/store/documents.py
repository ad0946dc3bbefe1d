"""
Verification document registry.

In production files go to object storage and rows to the hosted backend's
``garage_documents`` table; an external reviewer sets ``verified`` or a
rejection reason. Documents never expire.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from garagedesk.errors import NotFoundError, ValidationError
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.verification_schema import DocumentType, GarageDocument

logger = get_garage_logger(__name__)


class DocumentRegistry:
    """Uploaded documents for all garages."""

    def __init__(self) -> None:
        self._documents: dict[str, GarageDocument] = {}

    def upload_document(
        self, garage_id: str, document_type: DocumentType, file_url: str = ""
    ) -> GarageDocument:
        """Record a new, unreviewed document."""
        set_garage_id(garage_id)
        document = GarageDocument(
            id=f"DOC-{uuid.uuid4().hex[:8].upper()}",
            garage_id=garage_id,
            document_type=document_type,
            file_url=file_url,
            uploaded_at=datetime.now(timezone.utc),
        )
        self._documents[document.id] = document
        logger.info("Document uploaded: %s (%s) for %s",
                    document.id, document_type.value, garage_id)
        return document.model_copy()

    def review_document(
        self, document_id: str, verified: bool, rejection_reason: Optional[str] = None
    ) -> GarageDocument:
        """Apply a reviewer decision. Rejections need a reason.

        Raises:
            NotFoundError: If the document is unknown.
            ValidationError: If a rejection has no reason.
        """
        document = self._documents.get(document_id)
        if document is None:
            raise NotFoundError(f"Document {document_id} not found.")
        set_garage_id(document.garage_id)
        if not verified and not (rejection_reason and rejection_reason.strip()):
            raise ValidationError("A rejection reason is required.")
        document.verified = verified
        document.rejection_reason = None if verified else rejection_reason.strip()
        if verified:
            logger.info("Document %s verified", document_id)
        else:
            logger.warning("Document %s rejected: %s", document_id, document.rejection_reason)
        return document.model_copy()

    def list_documents(self, garage_id: str) -> list[GarageDocument]:
        """All documents of a garage, oldest first."""
        docs = [d for d in self._documents.values() if d.garage_id == garage_id]
        return [d.model_copy() for d in sorted(docs, key=lambda d: d.uploaded_at)]

    def has_documents(self, garage_id: str) -> bool:
        return any(d.garage_id == garage_id for d in self._documents.values())

    def reset(self) -> None:
        self._documents.clear()
