import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, Optional, Sequence

from sqlalchemy.orm import Session, sessionmaker

from database import utcnow
from modules.documents.models.document import DocumentStatus
from modules.documents.models.registry_state import RegistryState, REGISTRY_STATE_ID
from modules.documents.models.schemas import DocumentDetails, VerificationResult
from modules.documents.services.document_service import DocumentService
from modules.documents.services.document_state_service import DocumentStateService
from modules.documents.services.errors import RegistryError
from modules.documents.services.signature_service import SignatureService
from modules.events.repositories.event_repository import EventRepository
from modules.events.services.event_service import EventService

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """
    Single consistency domain over documents, signatures and the audit log.

    Every public operation holds the instance lock and runs in one session
    that commits on success and rolls back on any error, so callers only ever
    observe complete states.
    """

    def __init__(self, session_factory: sessionmaker, administrator: str,
                 clock: Callable[[], datetime] = utcnow):
        self._session_factory = session_factory
        self._configured_administrator = administrator
        self._clock = clock
        self._lock = threading.RLock()
        self._administrator: Optional[str] = None

    @property
    def administrator(self) -> str:
        if self._administrator is None:
            raise RegistryError("Registry has not been initialized")
        return self._administrator

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        with self._lock:
            session = self._session_factory()
            try:
                yield session
                session.commit()
            except RegistryError as e:
                session.rollback()
                logger.warning(
                    "Registry operation rejected",
                    extra={"operation": operation, "error": type(e).__name__,
                           "document_id": e.document_id, "reason": str(e)},
                )
                raise
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def initialize(self) -> str:
        """
        Creates the registry state row on first start. Later starts keep the stored
        administrator and counter.
        """
        with self._transaction("initialize") as session:
            state = session.get(RegistryState, REGISTRY_STATE_ID, with_for_update=True)
            if state is None:
                state = RegistryState(
                    id=REGISTRY_STATE_ID,
                    administrator=self._configured_administrator,
                    document_counter=0,
                    initialized_at=self._clock(),
                )
                session.add(state)
                logger.info("Registry initialized", extra={"administrator": state.administrator})
            elif state.administrator != self._configured_administrator:
                logger.warning(
                    "Configured administrator differs from the stored one; keeping stored administrator",
                    extra={"stored": state.administrator, "configured": self._configured_administrator},
                )
            self._administrator = state.administrator
        return self._administrator

    def _events(self, session: Session) -> EventService:
        return EventService(EventRepository(session))

    def create_document(self, title: str, fingerprint: str, signatories: Sequence[str],
                        validity_seconds: int, caller: str) -> int:
        with self._transaction("create_document") as session:
            document = DocumentService.create_document(
                session, title, fingerprint, list(signatories or []), validity_seconds,
                caller, self._clock(), self._events(session),
            )
            document_id = document.id
        logger.info("Document created", extra={"document_id": document_id, "creator": caller,
                                               "signatories": len(signatories)})
        return document_id

    def sign_document(self, document_id: int, caller: str) -> DocumentStatus:
        with self._transaction("sign_document") as session:
            document = DocumentService.get_document(session, document_id, for_update=True)
            SignatureService.add_signature(document, caller, self._clock(), self._events(session))
            status = document.status
        logger.info("Document signed", extra={"document_id": document_id, "signatory": caller,
                                              "status": status.value})
        return status

    def revoke_document(self, document_id: int, caller: str) -> None:
        with self._transaction("revoke_document") as session:
            document = DocumentService.get_document(session, document_id, for_update=True)
            DocumentStateService.revoke_document(
                document, caller, self.administrator, self._clock(), self._events(session)
            )
        logger.info("Document revoked", extra={"document_id": document_id, "revoked_by": caller})

    def verify_document(self, document_id: int, fingerprint: str) -> VerificationResult:
        with self._transaction("verify_document") as session:
            document = DocumentService.get_document(session, document_id)
            return DocumentStateService.verify_document(
                document, fingerprint, SignatureService.count_signatures(document), self._clock()
            )

    def get_document_details(self, document_id: int) -> DocumentDetails:
        with self._transaction("get_document_details") as session:
            return DocumentDetails.model_validate(DocumentService.get_document(session, document_id))

    def get_user_documents(self, identity: str) -> list[int]:
        with self._transaction("get_user_documents") as session:
            return DocumentService.get_documents_by_user(session, identity)

    def get_document_signatories(self, document_id: int) -> list[str]:
        with self._transaction("get_document_signatories") as session:
            return SignatureService.list_signatories(DocumentService.get_document(session, document_id))

    def has_signed(self, document_id: int, identity: str) -> bool:
        with self._transaction("has_signed") as session:
            return SignatureService.has_signed(DocumentService.get_document(session, document_id), identity)
