import logging
from datetime import datetime

from modules.documents.models.document import Document, DocumentStatus
from modules.documents.models.schemas import VerificationResult
from modules.documents.services.errors import AlreadyInactiveError, InvalidStateError
from modules.documents.services.permission import is_active, require_creator_or_administrator
from modules.events.services.event_service import EventService

logger = logging.getLogger(__name__)

# DRAFT and EXPIRED are never entered, so they have no outgoing edges either
ALLOWED_TRANSITIONS = {
    DocumentStatus.DRAFT: frozenset(),
    DocumentStatus.PENDING_SIGNATURES: frozenset({DocumentStatus.FULLY_SIGNED, DocumentStatus.REVOKED}),
    DocumentStatus.FULLY_SIGNED: frozenset({DocumentStatus.REVOKED}),
    DocumentStatus.EXPIRED: frozenset(),
    DocumentStatus.REVOKED: frozenset(),
}


class DocumentStateService:

    @staticmethod
    def can_change_state(document: Document, new_status: DocumentStatus) -> bool:
        """
        Defines transition rules; an inactive document never moves again
        """
        if not document.is_active:
            return False
        return new_status in ALLOWED_TRANSITIONS.get(document.status, frozenset())

    @staticmethod
    def change_document_status(document: Document, new_status: DocumentStatus, now: datetime,
                               events: EventService) -> Document:
        """
        Applies a transition after validating it and raises the status event
        """
        if not DocumentStateService.can_change_state(document, new_status):
            raise InvalidStateError(
                f"Document {document.id} cannot change from {document.status.value} to {new_status.value}",
                document.id,
            )

        previous_status = document.status
        document.status = new_status
        events.record_status_changed(document.id, new_status.value, now)

        logger.info(
            "Document status changed",
            extra={"document_id": document.id, "from": previous_status.value, "to": new_status.value},
        )
        return document

    @staticmethod
    def revoke_document(document: Document, caller: str, administrator: str, now: datetime,
                        events: EventService) -> Document:
        """
        Revokes from any active status, FULLY_SIGNED included. Irreversible
        """
        require_creator_or_administrator(document, caller, administrator)
        if not document.is_active:
            raise AlreadyInactiveError(document.id)

        events.record_document_revoked(document.id, caller, now)
        DocumentStateService.change_document_status(document, DocumentStatus.REVOKED, now, events)
        document.is_active = False
        return document

    @staticmethod
    def verify_document(document: Document, expected_fingerprint: str, signature_count: int,
                        now: datetime) -> VerificationResult:
        return VerificationResult(
            is_valid=expected_fingerprint == document.fingerprint and is_active(document, now),
            status=document.status,
            signature_count=signature_count,
            total_signatories=len(document.signatories),
        )
