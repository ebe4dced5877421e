"""Project and status history models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.vfxflow.models.base import utc_now
from src.vfxflow.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """Production project. ``status`` is only written by ProjectStatusService."""

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    status: str = Field(default=ProjectStatus.DRAFT.value, max_length=20, index=True)
    client_id: UUID = Field(foreign_key="users.id", index=True)
    assigned_to: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)


class ProjectStatusHistory(SQLModel, table=True):
    """Append-only record of one project status change.

    ``from_status`` is null only for the entry written at creation.
    ``changed_by`` is null for system changes.
    """

    __tablename__ = "project_status_history"
    __table_args__ = (
        Index("ix_project_status_history_project_created", "project_id", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id")
    from_status: str | None = Field(default=None, max_length=20)
    to_status: str = Field(max_length=20)
    changed_by: UUID | None = Field(default=None, foreign_key="users.id")
    reason: str | None = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)
