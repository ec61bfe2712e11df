"""Demande service — ticket creation, workflow updates and soft deletion."""

from typing import List
from uuid import UUID

import structlog

from ticketstream.core.exceptions import EntityNotFoundException, ForbiddenException
from ticketstream.domain import lifecycle, policies
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.models.demande import Demande
from ticketstream.domain.repositories.demande_repository import DemandeRepository
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.domain.schemas.demande import DemandeCreate, DemandeFilter, DemandeUpdate

logger = structlog.get_logger(__name__)


def list_demandes(repo: DemandeRepository, actor: IdentityClaim, filters: DemandeFilter) -> List[Demande]:
    return repo.list_visible(actor, filters)


def get_demande(repo: DemandeRepository, actor: IdentityClaim, demande_id: UUID) -> Demande:
    demande = lifecycle.require_active(repo.get_active(demande_id), "Demande")
    if not policies.can_view_demande(actor, demande):
        raise ForbiddenException("You can only view your own demandes")
    return demande


def create_demande(repo: DemandeRepository, actor: IdentityClaim, body: DemandeCreate) -> Demande:
    if not policies.can_create_demande(actor):
        raise ForbiddenException("You cannot create demandes")

    demande = repo.add(lifecycle.new_demande(actor, title=body.title, description=body.description))
    logger.info("Demande created", demande_id=str(demande.id), actor_id=str(actor.user_id))
    return demande


def update_demande(
    repo: DemandeRepository,
    users: UserRepository,
    actor: IdentityClaim,
    demande_id: UUID,
    body: DemandeUpdate,
) -> Demande:
    demande = lifecycle.require_active(repo.get_by_id(demande_id), "Demande")
    can_edit_content = policies.can_edit_demande_content(actor, demande)
    can_edit_workflow = policies.can_edit_demande_workflow(actor)

    changes = body.model_dump(exclude_unset=True)
    agent_id = changes.get("assigned_agent_id")
    if can_edit_workflow and agent_id is not None and users.get_by_id(agent_id) is None:
        raise EntityNotFoundException("Assigned agent not found", {"user_id": str(agent_id)})

    applied = lifecycle.apply_demande_update(
        demande,
        actor,
        changes,
        can_edit_content=can_edit_content,
        can_edit_workflow=can_edit_workflow,
    )
    demande = repo.save(demande)
    logger.info("Demande updated", demande_id=str(demande.id), actor_id=str(actor.user_id), fields=applied)
    return demande


def delete_demande(repo: DemandeRepository, actor: IdentityClaim, demande_id: UUID) -> None:
    demande = lifecycle.require_active(repo.get_by_id(demande_id), "Demande")
    if not policies.can_delete_demande(actor, demande):
        raise ForbiddenException("You can only delete your own demandes")

    lifecycle.soft_delete(demande, actor, label="Demande")
    repo.save(demande)
    logger.info("Demande deleted", demande_id=str(demande_id), actor_id=str(actor.user_id))
