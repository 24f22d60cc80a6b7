import logging
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from modules.auth.dependencies import get_current_user, verify_registry_administrator
from modules.auth.services.auth_service import AuthService
from modules.auth.schemas.auth_schemas import LoginRequest, TokenResponse, UserCreate, UserResponse
from modules.documents.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=TokenResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    user = AuthService.authenticate_user(db, login_data.identity, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect identity or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = AuthService.create_access_token(
        data={"sub": user.identity},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        identity=user.identity,
        user_name=user.name,
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(verify_registry_administrator)
):
    """Creates a login account for a registry identity (registry administrator only)"""
    if AuthService.get_user_by_identity(db, user_data.identity):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Identity is already registered"
        )

    user = AuthService.register_user(db, user_data.identity, user_data.name, user_data.password)
    logger.info("Account registered", extra={"identity": user.identity, "registered_by": current_user.identity})
    return user


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    return current_user
