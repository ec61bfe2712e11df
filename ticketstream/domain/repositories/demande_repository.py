"""
Demande Repository Interface.
"""

from typing import List

from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.repositories.base import SoftDeleteRepository
from ticketstream.domain.models.demande import Demande
from ticketstream.domain.schemas.demande import DemandeFilter


class DemandeRepository(SoftDeleteRepository[Demande]):
    """Interface for Demande-specific operations."""

    def list_visible(self, actor: IdentityClaim, filters: DemandeFilter) -> List[Demande]:
        """List active demandes the actor may see, filtered and ordered.

        Non-agents only see their own demandes and only the status filter
        applies to them.
        """
        ...
