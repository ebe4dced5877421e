"""Schemas for the artist's view of shared work."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SequenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    name: str
    description: str | None
    order_index: int
    status: str


class ShotRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sequence_id: UUID
    name: str
    description: str | None
    frame_start: int
    frame_end: int
    status: str


class VisibleTaskRead(BaseModel):
    """A task the artist may see, with the access level their grant confers."""

    id: UUID
    shot_id: UUID
    name: str
    task_type: str
    status: str
    priority: str
    access_level: str
