from .document import Document, DocumentSignatory, DocumentStatus
from .registry_state import RegistryState, REGISTRY_STATE_ID
from .signature import Signature
from .user import User
from .user_index import UserDocumentIndex

__all__ = [
    'Document', 'DocumentSignatory', 'DocumentStatus', 'RegistryState', 'REGISTRY_STATE_ID',
    'Signature', 'User', 'UserDocumentIndex'
]
