from typing import List
from sqlalchemy.orm import Session

from modules.events.models.domain_event import DomainEvent


class EventRepository:
    def __init__(self, db_session: Session):
        self.db = db_session

    def append(self, event: DomainEvent) -> DomainEvent:
        # Committed together with the mutation that raised it
        self.db.add(event)
        self.db.flush()
        return event

    def find_by_document_id(self, document_id: int) -> List[DomainEvent]:
        return (
            self.db
            .query(DomainEvent)
            .filter(DomainEvent.document_id == document_id)
            .order_by(DomainEvent.id.asc())
            .all()
        )
