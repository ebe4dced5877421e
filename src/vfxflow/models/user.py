"""User identity models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.vfxflow.models.base import utc_now


class User(SQLModel, table=True):
    """Platform user. ``email`` doubles as the contact handle."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(max_length=100)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class UserRole(SQLModel, table=True):
    """Junction table for the roles a user holds."""

    __tablename__ = "user_roles"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    role: str = Field(max_length=20, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)
