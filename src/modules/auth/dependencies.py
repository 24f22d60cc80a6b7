from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from database import get_db
from modules.auth.services.auth_service import AuthService
from modules.documents.dependencies import get_registry
from modules.documents.models.user import User
from modules.documents.services.permission import is_administrator
from modules.documents.services.registry_service import DocumentRegistry

security = HTTPBearer()


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security), db: Session = Depends(get_db)) -> User:
    """Resolves the authenticated account from the bearer token"""
    user = AuthService.get_current_user(db, credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_identity(current_user: User = Depends(get_current_user)) -> str:
    return current_user.identity


def verify_registry_administrator(
    current_user: User = Depends(get_current_user),
    registry: DocumentRegistry = Depends(get_registry),
) -> User:
    """Only the registry administrator may hand out accounts"""
    if not is_administrator(current_user.identity, registry.administrator):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the registry administrator can perform this action"
        )
    return current_user
