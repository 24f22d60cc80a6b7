from sqlalchemy import Column, Integer, String, ForeignKey
from database import Base


class UserDocumentIndex(Base):
    """Append-only identity -> document id index; rows keep insertion order by id."""
    __tablename__ = 'user_document_index'

    id = Column(Integer, primary_key=True)
    identity = Column(String, nullable=False, index=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
