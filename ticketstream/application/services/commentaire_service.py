"""Commentaire service: comments on demandes."""

from typing import List, Optional
from uuid import UUID

import structlog

from ticketstream.core.exceptions import ForbiddenException
from ticketstream.domain import lifecycle, policies
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.models.commentaire import Commentaire
from ticketstream.domain.repositories.commentaire_repository import CommentaireRepository
from ticketstream.domain.repositories.demande_repository import DemandeRepository
from ticketstream.domain.schemas.commentaire import CommentaireCreate

logger = structlog.get_logger(__name__)


def list_commentaires(
    repo: CommentaireRepository, actor: IdentityClaim, demande_id: Optional[UUID] = None
) -> List[Commentaire]:
    return repo.list_visible(actor, demande_id)


def get_commentaire(repo: CommentaireRepository, actor: IdentityClaim, commentaire_id: UUID) -> Commentaire:
    commentaire = lifecycle.require_active(repo.get_active(commentaire_id), "Commentaire")
    if not policies.can_view_commentaire(actor, commentaire.demande):
        raise ForbiddenException("You can only view comments on your own demandes")
    return commentaire


def create_commentaire(
    repo: CommentaireRepository,
    demandes: DemandeRepository,
    actor: IdentityClaim,
    body: CommentaireCreate,
) -> Commentaire:
    parent = lifecycle.require_active(demandes.get_by_id(body.demande_id), "Demande")
    if not policies.can_create_commentaire(actor, parent):
        raise ForbiddenException("You can only comment on your own demandes")

    commentaire = repo.add(lifecycle.new_commentaire(actor, parent, content=body.content))
    logger.info(
        "Commentaire created",
        commentaire_id=str(commentaire.id),
        demande_id=str(parent.id),
        actor_id=str(actor.user_id),
    )
    return commentaire


def delete_commentaire(repo: CommentaireRepository, actor: IdentityClaim, commentaire_id: UUID) -> None:
    commentaire = lifecycle.require_active(repo.get_by_id(commentaire_id), "Commentaire")
    if not policies.can_delete_commentaire(actor, commentaire):
        raise ForbiddenException("You can only delete your own comments")

    lifecycle.soft_delete(commentaire, actor, label="Commentaire")
    repo.save(commentaire)
    logger.info("Commentaire deleted", commentaire_id=str(commentaire_id), actor_id=str(actor.user_id))
