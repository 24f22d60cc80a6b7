from sqlalchemy import Boolean, Column, Integer, String, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from enum import Enum as PyEnum
from database import Base


class DocumentStatus(PyEnum):
    DRAFT = "DRAFT"  # declared for compatibility, never assigned
    PENDING_SIGNATURES = "PENDING_SIGNATURES"
    FULLY_SIGNED = "FULLY_SIGNED"
    EXPIRED = "EXPIRED"  # derived from expires_at, never stored
    REVOKED = "REVOKED"


class Document(Base):
    __tablename__ = 'documents'

    # Assigned from RegistryState.document_counter, never by the database
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String, nullable=False)
    fingerprint = Column(String, nullable=False)
    creator = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    status = Column(Enum(DocumentStatus), nullable=False, default=DocumentStatus.PENDING_SIGNATURES)

    signatories = relationship(
        "DocumentSignatory",
        back_populates="document",
        order_by="DocumentSignatory.position",
        cascade="all, delete-orphan",
    )
    signatures = relationship(
        "Signature",
        back_populates="document",
        order_by="Signature.order",
        cascade="all, delete-orphan",
    )

    @property
    def signatory_identities(self) -> list[str]:
        return [s.identity for s in self.signatories]

    @property
    def signed_identities(self) -> set[str]:
        return {s.signatory for s in self.signatures}


class DocumentSignatory(Base):
    """One entry of a document's required-signer list, in input order."""
    __tablename__ = 'document_signatories'
    __table_args__ = (UniqueConstraint("document_id", "position"),)

    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    position = Column(Integer, nullable=False)
    identity = Column(String, nullable=False)

    document = relationship("Document", back_populates="signatories")
