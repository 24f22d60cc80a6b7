from pydantic import BaseModel
from datetime import datetime
from typing import Any, Dict


class DomainEventResponse(BaseModel):
    id: int
    event_type: str
    document_id: int
    payload: Dict[str, Any]
    created_at: datetime

    model_config = {"from_attributes": True}
