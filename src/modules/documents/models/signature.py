# src/modules/documents/models/signature.py

from sqlalchemy import Column, Integer, ForeignKey, DateTime, String, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base


class Signature(Base):
    __tablename__ = "signatures"
    # One slot per identity, even when the identity is listed twice
    __table_args__ = (UniqueConstraint("document_id", "signatory"),)

    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    signatory   = Column(String, nullable=False)
    ts          = Column(DateTime, nullable=False)
    order       = Column(Integer, nullable=False)

    document = relationship("Document", back_populates="signatures")
