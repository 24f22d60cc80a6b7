# modules/events/controllers/event_controller.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from modules.events.repositories.event_repository import EventRepository
from modules.events.services.event_service import EventService
from modules.events.models.schemas import DomainEventResponse

router = APIRouter()


def get_event_service(db: Session = Depends(get_db)) -> EventService:
    return EventService(EventRepository(db))


@router.get(
    "/documents/{document_id}",
    response_model=List[DomainEventResponse],
    summary="Audit events raised for a document, oldest first"
)
def list_document_events(
    document_id: int,
    service: EventService = Depends(get_event_service)
):
    return service.get_events(document_id)
