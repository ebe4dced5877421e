"""Production breakdown: sequences, shots and tasks.

Only the columns the workflow engine reads are modelled here.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.vfxflow.models.base import utc_now


class Sequence(SQLModel, table=True):
    __tablename__ = "sequences"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    order_index: int = Field(default=0)
    status: str = Field(default="active", max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Shot(SQLModel, table=True):
    __tablename__ = "shots"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    sequence_id: UUID = Field(foreign_key="sequences.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    frame_start: int = Field(default=1001)
    frame_end: int = Field(default=1100)
    status: str = Field(default="pending", max_length=20)
    assigned_to: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    shot_id: UUID = Field(foreign_key="shots.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    task_type: str = Field(default="general", max_length=50)
    status: str = Field(default="todo", max_length=20)
    priority: str = Field(default="medium", max_length=20)
    assigned_to: UUID | None = Field(default=None, foreign_key="users.id")
    estimated_hours: float | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
