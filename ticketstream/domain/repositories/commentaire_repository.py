"""
Commentaire Repository Interface.
"""

from typing import List, Optional
from uuid import UUID

from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.repositories.base import SoftDeleteRepository
from ticketstream.domain.models.commentaire import Commentaire


class CommentaireRepository(SoftDeleteRepository[Commentaire]):
    """Interface for Commentaire-specific operations."""

    def list_visible(self, actor: IdentityClaim, demande_id: Optional[UUID] = None) -> List[Commentaire]:
        """List active comments the actor may see, oldest first."""
        ...
