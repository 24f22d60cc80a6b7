from typing import Optional


class RegistryError(Exception):
    """Base class for every registry operation failure"""

    def __init__(self, message: str, document_id: Optional[int] = None):
        self.document_id = document_id
        super().__init__(message)


class ValidationError(RegistryError):
    """Malformed create input"""
    pass


class NotFoundError(RegistryError):
    def __init__(self, document_id: int):
        super().__init__(f"Document {document_id} not found", document_id)


class AuthorizationError(RegistryError):
    """Caller lacks the role the operation requires"""
    pass


class InactiveError(RegistryError):
    """Document is revoked or past its expiry time"""
    def __init__(self, document_id: int):
        super().__init__(f"Document {document_id} is not active", document_id)


class InvalidStateError(RegistryError):
    """Operation not permitted in the document's current status"""
    pass


class AlreadySignedError(RegistryError):
    def __init__(self, document_id: int, signatory: str):
        self.signatory = signatory
        super().__init__(f"'{signatory}' already signed document {document_id}", document_id)


class AlreadyInactiveError(RegistryError):
    def __init__(self, document_id: int):
        super().__init__(f"Document {document_id} is already inactive", document_id)
