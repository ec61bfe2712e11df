"""Commentaire domain model, append-only notes on a demande."""

import uuid

from sqlalchemy import Column, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from ticketstream.infrastructure.database import Base


class Commentaire(Base):
    __tablename__ = "commentaires"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    content = Column(Text, nullable=False)

    # Deleting the parent demande does not touch its comments
    demande_id = Column(Uuid, ForeignKey("demandes.id"), nullable=False, index=True)
    author_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by_id = Column(Uuid, ForeignKey("users.id"), nullable=True)

    demande = relationship("Demande", lazy="joined")
    author = relationship("User", foreign_keys=[author_id], lazy="joined")
    deleted_by = relationship("User", foreign_keys=[deleted_by_id])

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self):
        return f"<Commentaire {self.id} on {self.demande_id}>"
