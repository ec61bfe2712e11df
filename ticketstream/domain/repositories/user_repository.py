"""
User Repository Interface.
"""

from typing import List, Optional

from ticketstream.domain.repositories.base import BaseRepository
from ticketstream.domain.models.user import User
from ticketstream.domain.schemas.auth import UserFilter


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, case-insensitively, active or not."""
        ...

    def list_with_filters(self, filters: UserFilter) -> List[User]:
        """List users matching the optional active/email/role filters."""
        ...
