from datetime import datetime
from typing import Optional

from modules.documents.models.document import Document
from modules.documents.services.errors import (
    AuthorizationError, InactiveError, NotFoundError
)

# Predicates never touch the session and never mutate the document;
# the require_* variants only add the failure signal.


def is_active(document: Document, now: datetime) -> bool:
    return bool(document.is_active) and now <= document.expires_at


def is_creator(document: Document, caller: str) -> bool:
    return document.creator == caller


def is_administrator(caller: str, administrator: str) -> bool:
    return caller == administrator


def is_signatory(document: Document, caller: str) -> bool:
    return caller in document.signatory_identities


def require_exists(document: Optional[Document], document_id: int) -> Document:
    if document is None:
        raise NotFoundError(document_id)
    return document


def require_active(document: Document, now: datetime) -> None:
    if not is_active(document, now):
        raise InactiveError(document.id)


def require_creator(document: Document, caller: str) -> None:
    if not is_creator(document, caller):
        raise AuthorizationError(f"'{caller}' is not the creator of document {document.id}", document.id)


def require_administrator(caller: str, administrator: str) -> None:
    if not is_administrator(caller, administrator):
        raise AuthorizationError(f"'{caller}' is not the registry administrator")


def require_creator_or_administrator(document: Document, caller: str, administrator: str) -> None:
    if not (is_creator(document, caller) or is_administrator(caller, administrator)):
        raise AuthorizationError(
            f"'{caller}' is neither the creator of document {document.id} nor the registry administrator",
            document.id,
        )


def require_signatory(document: Document, caller: str) -> None:
    if not is_signatory(document, caller):
        raise AuthorizationError(f"'{caller}' is not a signatory of document {document.id}", document.id)
