# modules/events/services/event_service.py
from datetime import datetime
from typing import List

from modules.events.models.domain_event import DomainEvent
from modules.events.repositories.event_repository import EventRepository

DOCUMENT_CREATED = "DocumentCreated"
DOCUMENT_SIGNED = "DocumentSigned"
DOCUMENT_STATUS_CHANGED = "DocumentStatusChanged"
DOCUMENT_REVOKED = "DocumentRevoked"


class EventTemplate:
    event_type = None

    def __init__(self, document_id: int, **fields):
        self.document_id = document_id
        self.fields = fields

    def to_dict(self):
        return {'id': self.document_id, **self.fields}


class DocumentCreatedEvent(EventTemplate):
    event_type = DOCUMENT_CREATED

    def __init__(self, document_id: int, title: str, creator: str):
        super().__init__(document_id, title=title, creator=creator)


class DocumentSignedEvent(EventTemplate):
    event_type = DOCUMENT_SIGNED

    def __init__(self, document_id: int, signatory: str):
        super().__init__(document_id, signatory=signatory)


class DocumentStatusChangedEvent(EventTemplate):
    event_type = DOCUMENT_STATUS_CHANGED

    def __init__(self, document_id: int, new_status: str):
        super().__init__(document_id, new_status=new_status)


class DocumentRevokedEvent(EventTemplate):
    event_type = DOCUMENT_REVOKED

    def __init__(self, document_id: int, revoked_by: str):
        super().__init__(document_id, revoked_by=revoked_by)


class EventService:
    def __init__(self, repository: EventRepository):
        self.event_repository = repository

    def _record(self, template: EventTemplate, now: datetime) -> DomainEvent:
        event = DomainEvent(
            event_type=template.event_type,
            document_id=template.document_id,
            payload=template.to_dict(),
            created_at=now,
        )
        return self.event_repository.append(event)

    def record_document_created(self, document_id: int, title: str, creator: str, now: datetime) -> DomainEvent:
        return self._record(DocumentCreatedEvent(document_id, title, creator), now)

    def record_document_signed(self, document_id: int, signatory: str, now: datetime) -> DomainEvent:
        return self._record(DocumentSignedEvent(document_id, signatory), now)

    def record_status_changed(self, document_id: int, new_status: str, now: datetime) -> DomainEvent:
        return self._record(DocumentStatusChangedEvent(document_id, new_status), now)

    def record_document_revoked(self, document_id: int, revoked_by: str, now: datetime) -> DomainEvent:
        return self._record(DocumentRevokedEvent(document_id, revoked_by), now)

    def get_events(self, document_id: int) -> List[DomainEvent]:
        return self.event_repository.find_by_document_id(document_id)
