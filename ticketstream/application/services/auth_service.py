"""Auth service — JWT token management, password hashing, register and login."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError

from ticketstream.config import get_settings
from ticketstream.core.exceptions import (
    DuplicateEmailException,
    InactiveAccountException,
    InvalidCredentialsException,
)
from ticketstream.domain import lifecycle
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.enums import UserRole
from ticketstream.domain.models.user import User
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.domain.schemas.auth import UserCreate

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def claim_for(user: User) -> IdentityClaim:
    return IdentityClaim(user_id=user.id, role=UserRole(user.role))


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "name": user.name,
        "role": UserRole(user.role).value,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[IdentityClaim]:
    """Verify a bearer token and return the claim it carries, or None."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
        return IdentityClaim(user_id=UUID(payload["sub"]), role=UserRole(payload["role"]))
    except (JWTError, KeyError, ValueError):
        return None


def register_user(repo: UserRepository, body: UserCreate) -> User:
    lifecycle.ensure_email_available(repo.get_by_email(body.email), body.email)
    user = lifecycle.new_user(
        name=body.name,
        email=body.email,
        role=body.role,
        password_hash=hash_password(body.password),
    )
    try:
        user = repo.add(user)
    except IntegrityError as exc:
        raise DuplicateEmailException(body.email) from exc
    logger.info("User registered", user_id=str(user.id), role=user.role.value)
    return user


def authenticate_user(repo: UserRepository, email: str, password: str) -> User:
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login rejected", reason="invalid_credentials")
        raise InvalidCredentialsException()
    if not user.is_active:
        logger.warning("Login rejected", reason="inactive_account", user_id=str(user.id))
        raise InactiveAccountException()
    return user
