from datetime import datetime

from modules.documents.models.document import Document, DocumentStatus
from modules.documents.models.signature import Signature
from modules.documents.services.document_state_service import DocumentStateService
from modules.documents.services.errors import AlreadySignedError, InvalidStateError
from modules.documents.services.permission import require_active, require_signatory
from modules.events.services.event_service import EventService


class SignatureService:

    @staticmethod
    def add_signature(document: Document, caller: str, now: datetime, events: EventService) -> Signature:
        """
        Records the caller's signature and completes the document when it was the last one missing.
        Must run inside the registry transaction that loaded the document.
        """
        require_active(document, now)
        if document.status != DocumentStatus.PENDING_SIGNATURES:
            raise InvalidStateError(
                f"Document {document.id} is {document.status.value}, signatures are closed",
                document.id,
            )
        if caller in document.signed_identities:
            raise AlreadySignedError(document.id, caller)
        require_signatory(document, caller)

        sig = Signature(
            signatory=caller,
            ts=now,
            order=len(document.signatures) + 1,
        )
        document.signatures.append(sig)
        events.record_document_signed(document.id, caller, now)

        if SignatureService.all_signed(document):
            DocumentStateService.change_document_status(document, DocumentStatus.FULLY_SIGNED, now, events)
        return sig

    @staticmethod
    def all_signed(document: Document) -> bool:
        signed = document.signed_identities
        return all(identity in signed for identity in document.signatory_identities)

    @staticmethod
    def count_signatures(document: Document) -> int:
        """Counts over the signatory list, so a repeated identity counts once per entry"""
        signed = document.signed_identities
        return sum(1 for identity in document.signatory_identities if identity in signed)

    @staticmethod
    def has_signed(document: Document, identity: str) -> bool:
        return identity in document.signed_identities

    @staticmethod
    def list_signatories(document: Document) -> list[str]:
        return list(document.signatory_identities)
