from sqlalchemy import Column, Integer, String, DateTime
from database import Base

REGISTRY_STATE_ID = 1


class RegistryState(Base):
    """Single row holding the process-wide administrator and document counter."""
    __tablename__ = 'registry_state'

    id = Column(Integer, primary_key=True, autoincrement=False)
    administrator = Column(String, nullable=False)
    document_counter = Column(Integer, nullable=False, default=0)
    initialized_at = Column(DateTime, nullable=False)
