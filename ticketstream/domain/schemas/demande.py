"""Pydantic schemas for the Demande domain."""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from ticketstream.domain.enums import DemandeStatus, SortOrder
from ticketstream.domain.schemas.auth import UserSummary


class DemandeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)


class DemandeUpdate(BaseModel):
    """Partial update; only the fields actually sent are considered."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    status: Optional[DemandeStatus] = None
    assigned_agent_id: Optional[UUID] = None
    assigned_at: Optional[datetime] = None


class DemandeFilter(BaseModel):
    status: Optional[DemandeStatus] = None
    assigned_agent_id: Optional[UUID] = None
    is_assigned: Optional[bool] = None
    created_on: Optional[date] = None
    tri: SortOrder = SortOrder.NEWEST


class DemandeRead(BaseModel):
    id: UUID
    title: str
    description: str
    status: DemandeStatus

    creator_id: UUID
    creator: Optional[UserSummary] = None
    assigned_agent_id: Optional[UUID] = None
    assigned_agent: Optional[UserSummary] = None
    assigned_at: Optional[datetime] = None

    created_at: datetime
    updated_at: Optional[datetime] = None
    updated_by_id: Optional[UUID] = None

    model_config = {"from_attributes": True}
