"""Pydantic schemas for the Commentaire domain."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from uuid import UUID

from ticketstream.domain.schemas.auth import UserSummary


class CommentaireCreate(BaseModel):
    content: str = Field(..., min_length=1)
    demande_id: UUID


class CommentaireRead(BaseModel):
    id: UUID
    content: str
    demande_id: UUID
    author_id: UUID
    author: Optional[UserSummary] = None
    created_at: datetime

    model_config = {"from_attributes": True}
