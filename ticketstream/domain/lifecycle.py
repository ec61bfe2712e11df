"""
Entity lifecycle model.

Construction and state transitions for users, demandes and commentaires.
Who may trigger a transition is decided by ``ticketstream.domain.policies``;
these functions only keep the records internally consistent. They mutate
ORM instances in memory and never commit.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, TypeVar

from ticketstream.core.exceptions import (
    AlreadyInactiveException,
    DuplicateEmailException,
    EntityNotFoundException,
    ForbiddenException,
)
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.enums import DemandeStatus, UserRole
from ticketstream.domain.models.commentaire import Commentaire
from ticketstream.domain.models.demande import Demande
from ticketstream.domain.models.user import User

SoftDeletable = TypeVar("SoftDeletable", Demande, Commentaire)

CONTENT_FIELDS = ("title", "description")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_active(record: Optional[SoftDeletable], label: str) -> SoftDeletable:
    """Return the record if it exists and is not soft-deleted."""
    if record is None or record.deleted_at is not None:
        raise EntityNotFoundException(f"{label} not found", {"kind": label.lower()})
    return record


# Users

def ensure_email_available(existing: Optional[User], email: str, *, allow: Optional[uuid.UUID] = None) -> None:
    """Raise if ``existing`` (the holder of ``email``) is someone other than ``allow``."""
    if existing is not None and existing.id != allow:
        raise DuplicateEmailException(email)


def new_user(*, name: str, email: str, role: UserRole, password_hash: str) -> User:
    return User(
        id=uuid.uuid4(),
        name=name,
        email=email,
        role=role,
        password_hash=password_hash,
        is_active=True,
    )


def apply_user_update(
    user: User,
    changes: Mapping[str, Any],
    *,
    can_change_role: bool,
    hasher: Callable[[str], str],
) -> list[str]:
    """Apply a profile update and return the names of the fields written.

    A role change from a caller without ``can_change_role`` is dropped, and a
    blank password leaves the stored hash alone.
    """
    applied = []
    for field in ("name", "email"):
        if changes.get(field) is not None:
            setattr(user, field, changes[field])
            applied.append(field)

    if can_change_role and changes.get("role") is not None:
        user.role = UserRole(changes["role"])
        applied.append("role")

    password = changes.get("password")
    if password and password.strip():
        user.password_hash = hasher(password)
        applied.append("password")

    return applied


def deactivate_user(user: User) -> None:
    if not user.is_active:
        raise AlreadyInactiveException(user.id)
    user.is_active = False


# Demandes

def new_demande(actor: IdentityClaim, *, title: str, description: str, now: Optional[datetime] = None) -> Demande:
    return Demande(
        id=uuid.uuid4(),
        title=title,
        description=description,
        status=DemandeStatus.PENDING,
        creator_id=actor.user_id,
        assigned_agent_id=None,
        assigned_at=None,
        created_at=now or utcnow(),
    )


def apply_demande_update(
    demande: Demande,
    actor: IdentityClaim,
    changes: Mapping[str, Any],
    *,
    can_edit_content: bool,
    can_edit_workflow: bool,
    now: Optional[datetime] = None,
) -> list[str]:
    """Apply the fields the actor is entitled to and stamp the update.

    Fields outside the actor's rights are ignored. ``assigned_at`` follows
    ``assigned_agent_id``: it is set when the agent is set or changed (to the
    supplied time, or now) and cleared with the agent.
    """
    if not (can_edit_content or can_edit_workflow):
        raise ForbiddenException("You cannot modify this demande")

    now = now or utcnow()
    applied = []

    if can_edit_content:
        for field in CONTENT_FIELDS:
            if changes.get(field) is not None:
                setattr(demande, field, changes[field])
                applied.append(field)

    if can_edit_workflow:
        if changes.get("status") is not None:
            demande.status = DemandeStatus(changes["status"])
            applied.append("status")

        explicit_time = changes.get("assigned_at")
        if "assigned_agent_id" in changes:
            agent_id = changes["assigned_agent_id"]
            if agent_id is None:
                if demande.assigned_agent_id is not None or demande.assigned_at is not None:
                    demande.assigned_agent_id = None
                    demande.assigned_at = None
                    applied.append("assigned_agent_id")
            elif agent_id != demande.assigned_agent_id or explicit_time is not None:
                demande.assigned_agent_id = agent_id
                demande.assigned_at = explicit_time or now
                applied.append("assigned_agent_id")
        elif explicit_time is not None and demande.assigned_agent_id is not None:
            demande.assigned_at = explicit_time
            applied.append("assigned_at")

    demande.updated_at = now
    demande.updated_by_id = actor.user_id
    return applied


def soft_delete(record: Optional[SoftDeletable], actor: IdentityClaim, *, label: str, now: Optional[datetime] = None) -> SoftDeletable:
    record = require_active(record, label)
    record.deleted_at = now or utcnow()
    record.deleted_by_id = actor.user_id
    return record


# Commentaires

def new_commentaire(
    actor: IdentityClaim,
    parent: Optional[Demande],
    *,
    content: str,
    now: Optional[datetime] = None,
) -> Commentaire:
    parent = require_active(parent, "Demande")
    return Commentaire(
        id=uuid.uuid4(),
        content=content,
        demande_id=parent.id,
        author_id=actor.user_id,
        created_at=now or utcnow(),
    )
