"""
Access policy engine.

Pure decision functions answering "may this actor do X to that record".
They only look at the identity claim and at ownership metadata already
loaded on the record (``creator_id``, ``author_id``); they never touch
storage, so callers must load the record first.
"""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from ticketstream.domain.claims import IdentityClaim


class OwnedByCreator(Protocol):
    creator_id: UUID


class OwnedByAuthor(Protocol):
    author_id: UUID


@dataclass(frozen=True, slots=True)
class UserEditGrant:
    allowed: bool
    can_change_role: bool


# Users

def can_view_user(actor: IdentityClaim, target_user_id: UUID) -> bool:
    return actor.is_agent or actor.user_id == target_user_id


def can_list_users(actor: IdentityClaim) -> bool:
    return actor.is_agent


def can_edit_user(actor: IdentityClaim, target_user_id: UUID) -> UserEditGrant:
    return UserEditGrant(
        allowed=actor.is_agent or actor.user_id == target_user_id,
        can_change_role=actor.is_agent,
    )


def can_deactivate_user(actor: IdentityClaim) -> bool:
    return actor.is_agent


# Demandes

def can_view_demande(actor: IdentityClaim, demande: OwnedByCreator) -> bool:
    return actor.is_agent or demande.creator_id == actor.user_id


def can_create_demande(actor: IdentityClaim) -> bool:
    return True


def can_edit_demande_content(actor: IdentityClaim, demande: OwnedByCreator) -> bool:
    """Title and description belong to the creator, whatever their role."""
    return demande.creator_id == actor.user_id


def can_edit_demande_workflow(actor: IdentityClaim) -> bool:
    """Status and assignment belong to the agents collectively."""
    return actor.is_agent


def can_delete_demande(actor: IdentityClaim, demande: OwnedByCreator) -> bool:
    return actor.is_agent or demande.creator_id == actor.user_id


# Commentaires

def can_view_commentaire(actor: IdentityClaim, parent_demande: OwnedByCreator) -> bool:
    return can_view_demande(actor, parent_demande)


def can_create_commentaire(actor: IdentityClaim, parent_demande: OwnedByCreator) -> bool:
    return actor.is_agent or parent_demande.creator_id == actor.user_id


def can_delete_commentaire(actor: IdentityClaim, commentaire: OwnedByAuthor) -> bool:
    return actor.is_agent or commentaire.author_id == actor.user_id
