from .document_service import DocumentService
from .document_state_service import DocumentStateService
from .registry_service import DocumentRegistry
from .signature_service import SignatureService

__all__ = ['DocumentService', 'DocumentStateService', 'DocumentRegistry', 'SignatureService']
