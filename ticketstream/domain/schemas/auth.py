"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional
from uuid import UUID

from ticketstream.domain.enums import UserRole


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.REGULAR

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value: Any) -> Any:
        return _strip(value)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    password: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value: Any) -> Any:
        return _strip(value)


class UserFilter(BaseModel):
    active: Optional[bool] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None


class UserRead(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    is_active: bool

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    id: UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
