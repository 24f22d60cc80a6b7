# src/modules/documents/controllers/signature_controller.py
from fastapi import APIRouter, Depends

from modules.auth.dependencies import get_current_identity
from modules.documents.dependencies import get_registry, to_http_exception
from modules.documents.models.schemas import HasSignedResponse, SignatoryListResponse
from modules.documents.services.errors import RegistryError
from modules.documents.services.registry_service import DocumentRegistry

router = APIRouter(
    tags=["signatures"]
)


@router.post("/{document_id}/sign")
def sign_document(
    document_id: int,
    caller: str = Depends(get_current_identity),
    registry: DocumentRegistry = Depends(get_registry)
):
    """
    Records the caller's signature; the last missing one completes the document.
    """
    try:
        new_status = registry.sign_document(document_id, caller)
    except RegistryError as e:
        raise to_http_exception(e)
    return {
        "message":     "Signature recorded",
        "document_id": document_id,
        "signatory":   caller,
        "status":      new_status.value,
    }


@router.get("/{document_id}/signatories", response_model=SignatoryListResponse)
def get_document_signatories(document_id: int, registry: DocumentRegistry = Depends(get_registry)):
    try:
        signatories = registry.get_document_signatories(document_id)
    except RegistryError as e:
        raise to_http_exception(e)
    return SignatoryListResponse(document_id=document_id, signatories=signatories)


@router.get("/{document_id}/signatures/{identity}", response_model=HasSignedResponse)
def has_signed(document_id: int, identity: str, registry: DocumentRegistry = Depends(get_registry)):
    try:
        signed = registry.has_signed(document_id, identity)
    except RegistryError as e:
        raise to_http_exception(e)
    return HasSignedResponse(document_id=document_id, identity=identity, has_signed=signed)
