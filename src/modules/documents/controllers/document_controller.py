import hashlib

from fastapi import APIRouter, UploadFile, File, HTTPException, Depends, status
from fastapi.concurrency import run_in_threadpool

from modules.auth.dependencies import get_current_identity
from modules.documents.dependencies import get_registry, to_http_exception
from modules.documents.models.schemas import (
    DocumentCreateRequest, DocumentCreatedResponse, DocumentDetails, FingerprintResponse,
    UserDocumentsResponse, VerificationResult, VerifyRequest
)
from modules.documents.services.errors import RegistryError
from modules.documents.services.registry_service import DocumentRegistry

router = APIRouter(
    tags=["documents"]
)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB


async def _fingerprint_upload(file: UploadFile) -> tuple[str, int]:
    """SHA-256 of the uploaded body. The body itself is discarded"""
    contents = await file.read()
    if not contents:
        raise HTTPException(400, "The uploaded file is empty")
    if len(contents) > MAX_FILE_SIZE:
        raise HTTPException(400, "The maximum file size is 10 MB")
    return hashlib.sha256(contents).hexdigest(), len(contents)


@router.post("", response_model=DocumentCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_document(
    payload: DocumentCreateRequest,
    caller: str = Depends(get_current_identity),
    registry: DocumentRegistry = Depends(get_registry)
):
    try:
        document_id = registry.create_document(
            payload.title, payload.fingerprint, payload.signatories, payload.validity_seconds, caller
        )
    except RegistryError as e:
        raise to_http_exception(e)
    return DocumentCreatedResponse(document_id=document_id)


@router.get("/users/{identity}", response_model=UserDocumentsResponse)
def get_user_documents(identity: str, registry: DocumentRegistry = Depends(get_registry)):
    return UserDocumentsResponse(identity=identity, document_ids=registry.get_user_documents(identity))


@router.post("/fingerprint", response_model=FingerprintResponse)
async def fingerprint_document(file: UploadFile = File(...)):
    fingerprint, size = await _fingerprint_upload(file)
    return FingerprintResponse(filename=file.filename, size=size, fingerprint=fingerprint)


@router.get("/{document_id}", response_model=DocumentDetails)
def get_document_details(document_id: int, registry: DocumentRegistry = Depends(get_registry)):
    try:
        return registry.get_document_details(document_id)
    except RegistryError as e:
        raise to_http_exception(e)


@router.post("/{document_id}/verify", response_model=VerificationResult)
def verify_document(
    document_id: int,
    payload: VerifyRequest,
    registry: DocumentRegistry = Depends(get_registry)
):
    try:
        return registry.verify_document(document_id, payload.fingerprint)
    except RegistryError as e:
        raise to_http_exception(e)


@router.post("/{document_id}/verify-file", response_model=VerificationResult)
async def verify_document_file(
    document_id: int,
    file: UploadFile = File(...),
    registry: DocumentRegistry = Depends(get_registry)
):
    """
    Hashes the uploaded body and verifies it against the stored fingerprint.
    """
    fingerprint, _ = await _fingerprint_upload(file)
    try:
        # The registry lock and DB I/O stay off the event loop
        return await run_in_threadpool(registry.verify_document, document_id, fingerprint)
    except RegistryError as e:
        raise to_http_exception(e)


@router.post("/{document_id}/revoke")
def revoke_document(
    document_id: int,
    caller: str = Depends(get_current_identity),
    registry: DocumentRegistry = Depends(get_registry)
):
    try:
        registry.revoke_document(document_id, caller)
    except RegistryError as e:
        raise to_http_exception(e)
    return {"message": "Document revoked", "document_id": document_id}
