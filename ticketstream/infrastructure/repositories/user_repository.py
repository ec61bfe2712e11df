"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import func

from ticketstream.domain.models.user import User
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.domain.schemas.auth import UserFilter
from ticketstream.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def list_with_filters(self, filters: UserFilter) -> List[User]:
        query = self.db.query(User)

        if filters.active is not None:
            query = query.filter(User.is_active == filters.active)
        if filters.email and filters.email.strip():
            query = query.filter(User.email.icontains(filters.email.strip(), autoescape=True))
        if filters.role is not None:
            query = query.filter(User.role == filters.role)

        return query.order_by(User.name.asc(), User.email.asc()).all()
