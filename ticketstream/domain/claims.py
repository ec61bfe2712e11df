"""Identity claim carried by every authenticated request."""

from dataclasses import dataclass
from uuid import UUID

from ticketstream.domain.enums import UserRole


@dataclass(frozen=True, slots=True)
class IdentityClaim:
    """Authenticated actor: who they are and which role they hold.

    Built from a verified bearer token and passed explicitly into every
    service call. Never stored.
    """

    user_id: UUID
    role: UserRole

    @property
    def is_agent(self) -> bool:
        return self.role == UserRole.AGENT
