"""Demande domain model, maps to the 'demandes' table."""

import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from ticketstream.domain.enums import DemandeStatus
from ticketstream.infrastructure.database import Base


class DemandeStatusType(TypeDecorator):
    """Stores a DemandeStatus as its French label ("En attente", ...)."""

    impl = String(50)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return DemandeStatus(value).label

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return DemandeStatus.from_label(value)


class Demande(Base):
    __tablename__ = "demandes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(DemandeStatusType(), nullable=False, default=DemandeStatus.PENDING, index=True)

    creator_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    assigned_agent_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)
    assigned_at = Column(DateTime(timezone=True), nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    updated_by_id = Column(Uuid, ForeignKey("users.id"), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # null = active
    deleted_by_id = Column(Uuid, ForeignKey("users.id"), nullable=True)

    creator = relationship("User", foreign_keys=[creator_id], lazy="joined")
    assigned_agent = relationship("User", foreign_keys=[assigned_agent_id], lazy="joined")
    updated_by = relationship("User", foreign_keys=[updated_by_id])
    deleted_by = relationship("User", foreign_keys=[deleted_by_id])

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self):
        return f"<Demande {self.id} - {self.title} [{self.status}]>"
