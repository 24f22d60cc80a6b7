from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from modules.documents.models.document import DocumentStatus


class DocumentCreateRequest(BaseModel):
    title: str
    fingerprint: str
    signatories: List[str]
    validity_seconds: int = Field(..., description="Seconds the document stays signable")


class DocumentCreatedResponse(BaseModel):
    message: str = "Document registered"
    document_id: int


class DocumentDetails(BaseModel):
    id: int
    title: str
    fingerprint: str
    creator: str
    created_at: datetime
    expires_at: datetime
    is_active: bool
    status: DocumentStatus

    model_config = {"from_attributes": True}


class VerifyRequest(BaseModel):
    fingerprint: str


class VerificationResult(BaseModel):
    is_valid: bool
    status: DocumentStatus
    signature_count: int
    total_signatories: int


class SignatoryListResponse(BaseModel):
    document_id: int
    signatories: List[str]


class UserDocumentsResponse(BaseModel):
    identity: str
    document_ids: List[int]


class HasSignedResponse(BaseModel):
    document_id: int
    identity: str
    has_signed: bool


class FingerprintResponse(BaseModel):
    filename: str
    size: int
    fingerprint: str
