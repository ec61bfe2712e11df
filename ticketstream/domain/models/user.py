"""User domain model — maps to the 'users' table."""

import uuid

from sqlalchemy import Column, String, Boolean, Enum, Index, Uuid, func

from ticketstream.domain.enums import UserRole
from ticketstream.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, native_enum=False, length=20, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.REGULAR,
    )
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"


# Case-insensitive uniqueness
Index("uq_users_email_lower", func.lower(User.email), unique=True)
