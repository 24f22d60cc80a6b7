from sqlalchemy import Column, Integer, String, DateTime, Boolean
from database import Base, utcnow


class User(Base):
    """Login account bound to an opaque registry identity."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    identity = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)
