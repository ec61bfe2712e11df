"""User service — profile reads, updates and deactivation."""

from typing import List
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from ticketstream.application.services.auth_service import hash_password
from ticketstream.core.exceptions import DuplicateEmailException, EntityNotFoundException, ForbiddenException
from ticketstream.domain import lifecycle, policies
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.models.user import User
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.domain.schemas.auth import UserFilter, UserUpdate

logger = structlog.get_logger(__name__)


def _load_user(repo: UserRepository, user_id: UUID) -> User:
    user = repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found", {"user_id": str(user_id)})
    return user


def list_users(repo: UserRepository, actor: IdentityClaim, filters: UserFilter) -> List[User]:
    if not policies.can_list_users(actor):
        raise ForbiddenException("Only agents can list users")
    return repo.list_with_filters(filters)


def get_user(repo: UserRepository, actor: IdentityClaim, user_id: UUID) -> User:
    if not policies.can_view_user(actor, user_id):
        raise ForbiddenException("You can only view your own profile")
    return _load_user(repo, user_id)


def update_user(repo: UserRepository, actor: IdentityClaim, user_id: UUID, body: UserUpdate) -> User:
    grant = policies.can_edit_user(actor, user_id)
    if not grant.allowed:
        raise ForbiddenException("You can only modify your own profile")

    user = _load_user(repo, user_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("email"):
        lifecycle.ensure_email_available(repo.get_by_email(changes["email"]), changes["email"], allow=user.id)

    applied = lifecycle.apply_user_update(
        user, changes, can_change_role=grant.can_change_role, hasher=hash_password
    )
    try:
        user = repo.save(user)
    except IntegrityError as exc:
        raise DuplicateEmailException(changes.get("email", "")) from exc
    logger.info("User updated", user_id=str(user.id), actor_id=str(actor.user_id), fields=applied)
    return user


def deactivate_user(repo: UserRepository, actor: IdentityClaim, user_id: UUID) -> User:
    if not policies.can_deactivate_user(actor):
        raise ForbiddenException("Only agents can deactivate users")

    user = _load_user(repo, user_id)
    lifecycle.deactivate_user(user)
    user = repo.save(user)
    logger.info("User deactivated", user_id=str(user.id), actor_id=str(actor.user_id))
    return user
