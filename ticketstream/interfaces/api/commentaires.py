"""Comments attached to demandes."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from ticketstream.application.services.commentaire_service import (
    create_commentaire,
    delete_commentaire,
    get_commentaire,
    list_commentaires,
)
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.repositories.commentaire_repository import CommentaireRepository
from ticketstream.domain.repositories.demande_repository import DemandeRepository
from ticketstream.domain.schemas.commentaire import CommentaireCreate, CommentaireRead
from ticketstream.interfaces.api.deps import get_current_claim
from ticketstream.interfaces.deps import get_commentaire_repository, get_demande_repository

router = APIRouter(prefix="/api/commentaires", tags=["Commentaires"])


@router.get("", response_model=list[CommentaireRead])
def list_all_commentaires(
    demande_id: Optional[UUID] = None,
    repo: CommentaireRepository = Depends(get_commentaire_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    return [CommentaireRead.model_validate(c) for c in list_commentaires(repo, actor, demande_id)]


@router.get("/{commentaire_id}", response_model=CommentaireRead)
def read_commentaire(
    commentaire_id: UUID,
    repo: CommentaireRepository = Depends(get_commentaire_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    return CommentaireRead.model_validate(get_commentaire(repo, actor, commentaire_id))


@router.post("", response_model=CommentaireRead, status_code=status.HTTP_201_CREATED)
def post_commentaire(
    body: CommentaireCreate,
    repo: CommentaireRepository = Depends(get_commentaire_repository),
    demandes: DemandeRepository = Depends(get_demande_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    """Comment on a demande; the author is always the caller."""
    return CommentaireRead.model_validate(create_commentaire(repo, demandes, actor, body))


@router.delete("/{commentaire_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_commentaire(
    commentaire_id: UUID,
    repo: CommentaireRepository = Depends(get_commentaire_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    delete_commentaire(repo, actor, commentaire_id)
