"""
Base Repository Interface.
Defines the standard contract for data access operations.
Records are never physically removed, so there is no delete here:
soft deletion is a field update persisted through ``save``.
"""

from typing import TypeVar, Optional, Protocol
from uuid import UUID

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic persistence operations."""

    def get_by_id(self, id: UUID) -> Optional[T]:
        """Get a single entity by ID, whatever its state."""
        ...

    def add(self, obj: T) -> T:
        """Persist a new entity and return it refreshed."""
        ...

    def save(self, obj: T) -> T:
        """Commit pending changes made to an entity and return it refreshed."""
        ...


class SoftDeleteRepository(BaseRepository[T], Protocol[T]):
    """Interface for entities carrying a ``deleted_at`` stamp."""

    def get_active(self, id: UUID) -> Optional[T]:
        """Get an entity by ID only if it has not been soft-deleted."""
        ...
