"""Project and status schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.vfxflow.schemas.pagination import PaginatedResponse


def _strip_or_none(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class StatusRead(BaseModel):
    """One catalog status with its display color."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    color: str
    sort_order: int
    description: str


class ProjectCreate(BaseModel):
    """Schema for creating a project.

    ``client_id`` defaults to the caller.
    """

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    client_id: UUID | None = None
    assigned_to: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project title cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _strip_or_none(v)


class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None
    status: str
    status_color: str
    client_id: UUID
    assigned_to: UUID | None
    created_at: datetime
    updated_at: datetime


class StatusChangeRequest(BaseModel):
    """Request a status change.

    ``expected_status`` is the status the client displayed; a stale value
    is answered with 409 instead of applying the change.
    """

    to_status: str = Field(min_length=1, max_length=20)
    reason: str | None = Field(default=None, max_length=1000)
    expected_status: str | None = Field(default=None, max_length=20)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str | None) -> str | None:
        return _strip_or_none(v)


class TransitionRead(BaseModel):
    to_status: str
    color: str
    auto_notification: bool


class AvailableTransitionsResponse(BaseModel):
    project_id: UUID
    current_status: str
    transitions: list[TransitionRead]


class StatusHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    from_status: str | None
    to_status: str
    changed_by: UUID | None
    reason: str | None
    created_at: datetime


StatusHistoryListResponse = PaginatedResponse[StatusHistoryRead]
