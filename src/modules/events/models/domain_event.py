from sqlalchemy import Column, Integer, String, DateTime, JSON

from database import Base


class DomainEvent(Base):
    """Append-only audit record; rows are never updated or deleted."""
    __tablename__ = 'domain_events'

    id = Column(Integer, primary_key=True)
    event_type = Column(String(64), nullable=False)
    document_id = Column(Integer, nullable=False, index=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False)
