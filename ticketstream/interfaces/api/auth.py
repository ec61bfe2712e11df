"""Auth API routes — register, login, me."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from ticketstream.application.services.auth_service import (
    authenticate_user,
    create_access_token,
    register_user,
)
from ticketstream.application.services.user_service import get_user
from ticketstream.core.exceptions import AlreadyAuthenticatedException
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.domain.schemas.auth import LoginRequest, TokenResponse, UserCreate, UserRead
from ticketstream.interfaces.api.deps import get_current_claim, get_optional_claim
from ticketstream.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, repo: UserRepository = Depends(get_user_repository)):
    user = register_user(repo, body)
    return UserRead.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    repo: UserRepository = Depends(get_user_repository),
    current: Optional[IdentityClaim] = Depends(get_optional_claim),
):
    if current is not None:
        raise AlreadyAuthenticatedException()

    user = authenticate_user(repo, body.email, body.password)
    access_token = create_access_token(user)

    return TokenResponse(
        access_token=access_token,
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=UserRead)
def get_me(
    repo: UserRepository = Depends(get_user_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    return UserRead.model_validate(get_user(repo, actor, actor.user_id))
