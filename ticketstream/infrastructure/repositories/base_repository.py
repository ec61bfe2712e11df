"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session
from ticketstream.domain.repositories.base import BaseRepository
from ticketstream.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: UUID) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def add(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        return self.save(obj)

    def save(self, obj: ModelType) -> ModelType:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(obj)
        return obj


class SQLAlchemySoftDeleteRepository(SQLAlchemyRepository[ModelType]):
    """Repository for models whose rows are hidden by a ``deleted_at`` stamp."""

    def active_query(self) -> Query:
        return self.db.query(self.model).filter(self.model.deleted_at.is_(None))

    def get_active(self, id: UUID) -> Optional[ModelType]:
        return self.active_query().filter(self.model.id == id).first()
