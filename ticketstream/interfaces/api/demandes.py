"""Demande routes with role-scoped visibility."""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ticketstream.application.services.demande_service import (
    create_demande,
    delete_demande,
    get_demande,
    list_demandes,
    update_demande,
)
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.enums import DemandeStatus, SortOrder
from ticketstream.domain.repositories.demande_repository import DemandeRepository
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.domain.schemas.demande import DemandeCreate, DemandeFilter, DemandeRead, DemandeUpdate
from ticketstream.interfaces.api.deps import get_current_claim
from ticketstream.interfaces.deps import get_demande_repository, get_user_repository

router = APIRouter(prefix="/api/demandes", tags=["Demandes"])


@router.get("", response_model=list[DemandeRead])
def list_all_demandes(
    status_filter: Optional[DemandeStatus] = Query(default=None, alias="status"),
    assigned_agent_id: Optional[UUID] = None,
    is_assigned: Optional[bool] = None,
    created_on: Optional[date] = None,
    tri: SortOrder = SortOrder.NEWEST,
    repo: DemandeRepository = Depends(get_demande_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    """List visible demandes.

    Everyone may filter by status. Agents may also filter by assigned agent,
    by assigned/unassigned and by creation day; those filters are ignored
    for other users, who only ever see their own demandes.
    """
    filters = DemandeFilter(
        status=status_filter,
        assigned_agent_id=assigned_agent_id,
        is_assigned=is_assigned,
        created_on=created_on,
        tri=tri,
    )
    return [DemandeRead.model_validate(d) for d in list_demandes(repo, actor, filters)]


@router.get("/{demande_id}", response_model=DemandeRead)
def read_demande(
    demande_id: UUID,
    repo: DemandeRepository = Depends(get_demande_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    return DemandeRead.model_validate(get_demande(repo, actor, demande_id))


@router.post("", response_model=DemandeRead, status_code=status.HTTP_201_CREATED)
def open_demande(
    body: DemandeCreate,
    repo: DemandeRepository = Depends(get_demande_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    return DemandeRead.model_validate(create_demande(repo, actor, body))


@router.put("/{demande_id}", response_model=DemandeRead)
def modify_demande(
    demande_id: UUID,
    body: DemandeUpdate,
    repo: DemandeRepository = Depends(get_demande_repository),
    users: UserRepository = Depends(get_user_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    """Update a demande.

    The creator edits title and description; agents edit status and
    assignment. Fields the caller may not touch are ignored.
    """
    return DemandeRead.model_validate(update_demande(repo, users, actor, demande_id, body))


@router.delete("/{demande_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_demande(
    demande_id: UUID,
    repo: DemandeRepository = Depends(get_demande_repository),
    actor: IdentityClaim = Depends(get_current_claim),
):
    delete_demande(repo, actor, demande_id)
