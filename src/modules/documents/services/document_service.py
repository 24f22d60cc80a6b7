import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from modules.documents.models.document import Document, DocumentSignatory, DocumentStatus
from modules.documents.models.registry_state import RegistryState, REGISTRY_STATE_ID
from modules.documents.models.user_index import UserDocumentIndex
from modules.documents.services.errors import RegistryError, ValidationError
from modules.documents.services.permission import require_exists
from modules.events.services.event_service import EventService

logger = logging.getLogger(__name__)


class DocumentService:

    @staticmethod
    def validate_new_document(title: str, fingerprint: str, signatories: Sequence[str], validity_seconds: int):
        """Rejects malformed create input before anything is written"""
        if not title:
            raise ValidationError("Title must not be empty")
        if not fingerprint:
            raise ValidationError("Fingerprint must not be empty")
        if not signatories:
            raise ValidationError("At least one signatory is required")
        if any(not isinstance(s, str) or not s for s in signatories):
            raise ValidationError("Signatory identities must be non-empty strings")
        if isinstance(validity_seconds, bool) or not isinstance(validity_seconds, int) or validity_seconds <= 0:
            raise ValidationError("Validity duration must be a positive number of seconds")

    @staticmethod
    def create_document(
        session: Session,
        title: str,
        fingerprint: str,
        signatories: Sequence[str],
        validity_seconds: int,
        creator: str,
        now: datetime,
        events: EventService,
    ) -> Document:
        """
        Registers a new document:
        - Validates the input
        - Allocates the next sequential id from the registry counter
        - Stores the document and its signatory list as given
        - Indexes the id for the creator and every signatory entry
        """
        DocumentService.validate_new_document(title, fingerprint, signatories, validity_seconds)

        state = session.get(RegistryState, REGISTRY_STATE_ID, with_for_update=True)
        if state is None:
            raise RegistryError("Registry has not been initialized")
        state.document_counter += 1

        document = Document(
            id=state.document_counter,
            title=title,
            fingerprint=fingerprint,
            creator=creator,
            created_at=now,
            expires_at=now + timedelta(seconds=validity_seconds),
            is_active=True,
            status=DocumentStatus.PENDING_SIGNATURES,
            signatories=[
                DocumentSignatory(position=position, identity=identity)
                for position, identity in enumerate(signatories)
            ],
        )
        session.add(document)
        session.flush()

        session.add(UserDocumentIndex(identity=creator, document_id=document.id))
        for identity in signatories:
            session.add(UserDocumentIndex(identity=identity, document_id=document.id))
        session.flush()

        events.record_document_created(document.id, title, creator, now)
        events.record_status_changed(document.id, document.status.value, now)
        return document

    @staticmethod
    def get_document(session: Session, document_id: int, for_update: bool = False) -> Document:
        document: Optional[Document] = session.get(Document, document_id, with_for_update=for_update)
        return require_exists(document, document_id)

    @staticmethod
    def get_documents_by_user(session: Session, identity: str) -> list[int]:
        """
        Ids the identity takes part in, in indexing order. Repeats are kept
        """
        rows = (
            session.query(UserDocumentIndex.document_id)
            .filter(UserDocumentIndex.identity == identity)
            .order_by(UserDocumentIndex.id.asc())
            .all()
        )
        return [row[0] for row in rows]
