"""Task sharing schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.vfxflow.models import AccessLevel, GrantDecision


class ArtistLookupResponse(BaseModel):
    handle: str
    artist_id: UUID


class ShareTaskRequest(BaseModel):
    """Share a task with an artist, named either by id or by contact handle."""

    artist_id: UUID | None = None
    artist_handle: str | None = Field(default=None, max_length=255)
    access_level: AccessLevel = AccessLevel.VIEW
    notes: str | None = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def check_artist(self) -> "ShareTaskRequest":
        if (self.artist_id is None) == (self.artist_handle is None):
            raise ValueError("Provide exactly one of artist_id or artist_handle")
        return self


class GrantUpdate(BaseModel):
    """Amend a grant while it is still pending."""

    access_level: AccessLevel | None = None
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class GrantDecisionRequest(BaseModel):
    decision: GrantDecision


class SharedTaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    task_id: UUID
    studio_id: UUID
    artist_id: UUID
    access_level: str
    status: str
    notes: str | None
    shared_at: datetime
    approved_at: datetime | None
    approved_by: UUID | None
