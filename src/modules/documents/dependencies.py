from fastapi import HTTPException, Request, status

from modules.documents.services.errors import (
    AlreadyInactiveError, AlreadySignedError, AuthorizationError, InactiveError,
    InvalidStateError, NotFoundError, RegistryError, ValidationError
)
from modules.documents.services.registry_service import DocumentRegistry

ERROR_STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InactiveError: status.HTTP_409_CONFLICT,
    InvalidStateError: status.HTTP_409_CONFLICT,
    AlreadySignedError: status.HTTP_409_CONFLICT,
    AlreadyInactiveError: status.HTTP_409_CONFLICT,
}


def get_registry(request: Request) -> DocumentRegistry:
    return request.app.state.registry


def to_http_exception(error: RegistryError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(
        status_code=status_code,
        detail={"error": type(error).__name__, "message": str(error)},
    )
