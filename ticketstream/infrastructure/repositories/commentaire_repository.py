"""
SQLAlchemy Implementation of Commentaire Repository.
"""

from typing import List, Optional
from uuid import UUID

from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.models.commentaire import Commentaire
from ticketstream.domain.models.demande import Demande
from ticketstream.domain.repositories.commentaire_repository import CommentaireRepository
from ticketstream.infrastructure.repositories.base_repository import SQLAlchemySoftDeleteRepository


class SQLAlchemyCommentaireRepository(SQLAlchemySoftDeleteRepository[Commentaire], CommentaireRepository):
    """Commentaire repository implementation using SQLAlchemy."""

    def list_visible(self, actor: IdentityClaim, demande_id: Optional[UUID] = None) -> List[Commentaire]:
        # Comments of a deleted demande stay listed
        query = self.active_query()

        if not actor.is_agent:
            query = query.join(Demande, Commentaire.demande_id == Demande.id).filter(
                Demande.creator_id == actor.user_id
            )

        if demande_id is not None:
            query = query.filter(Commentaire.demande_id == demande_id)

        return query.order_by(Commentaire.created_at.asc()).all()
