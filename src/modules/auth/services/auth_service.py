from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from config import settings
from modules.documents.models.user import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Checks the password against its hash"""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def get_user_by_identity(db: Session, identity: str) -> Optional[User]:
        return db.query(User).filter(User.identity == identity).first()

    @staticmethod
    def register_user(db: Session, identity: str, name: str, password: str) -> User:
        user = User(
            identity=identity,
            name=name,
            password_hash=AuthService.get_password_hash(password),
            is_active=True
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def seed_account(db: Session, identity: str, name: str, password: str) -> bool:
        """Creates the account only if the identity has none yet"""
        if AuthService.get_user_by_identity(db, identity):
            return False
        AuthService.register_user(db, identity, name, password)
        return True

    @staticmethod
    def authenticate_user(db: Session, identity: str, password: str) -> Optional[User]:
        """Authenticates an account by identity and password"""
        user = AuthService.get_user_by_identity(db, identity)
        if not user:
            return None
        if not AuthService.verify_password(password, user.password_hash):
            return None
        if not user.is_active:
            return None
        return user

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
        """Creates a signed JWT"""
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(minutes=15)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def verify_token(token: str) -> Optional[str]:
        """Verifies the JWT and returns the identity it was issued for"""
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
            identity: str = payload.get("sub")
            if identity is None:
                return None
            return identity
        except JWTError:
            return None

    @staticmethod
    def get_current_user(db: Session, token: str) -> Optional[User]:
        identity = AuthService.verify_token(token)
        if identity is None:
            return None
        user = AuthService.get_user_by_identity(db, identity)
        if user is None or not user.is_active:
            return None
        return user
