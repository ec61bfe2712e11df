"""User routes: list, read, update and deactivate accounts."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from ticketstream.application.services.user_service import (
    deactivate_user,
    get_user,
    list_users,
    update_user,
)
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.enums import UserRole
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.domain.schemas.auth import UserFilter, UserRead, UserUpdate
from ticketstream.interfaces.api.deps import get_current_claim
from ticketstream.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=list[UserRead])
def list_all_users(
    active: Optional[bool] = None,
    email: Optional[str] = None,
    role: Optional[UserRole] = None,
    repo: UserRepository = Depends(get_user_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    """List accounts (agents only)."""
    filters = UserFilter(active=active, email=email, role=role)
    return [UserRead.model_validate(u) for u in list_users(repo, actor, filters)]


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: UUID,
    repo: UserRepository = Depends(get_user_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    return UserRead.model_validate(get_user(repo, actor, user_id))


@router.put("/{user_id}", response_model=UserRead)
def modify_user(
    user_id: UUID,
    body: UserUpdate,
    repo: UserRepository = Depends(get_user_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    """Update a profile. The role is only changed when an agent asks for it."""
    return UserRead.model_validate(update_user(repo, actor, user_id, body))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(
    user_id: UUID,
    repo: UserRepository = Depends(get_user_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    """Deactivate an account; the record is kept."""
    deactivate_user(repo, actor, user_id)
