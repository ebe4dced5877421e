"""Shared task grants."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from src.vfxflow.models.base import utc_now
from src.vfxflow.models.enums import ACTIVE_GRANT_STATUSES, AccessLevel, GrantStatus

_ACTIVE_PAIR_PREDICATE = text("status IN ('pending', 'approved')")


class SharedTask(SQLModel, table=True):
    """Grant linking one task to one artist.

    At most one pending-or-approved grant may exist per (task, artist); the
    partial unique index enforces it at write time.
    """

    __tablename__ = "shared_tasks"
    __table_args__ = (
        Index(
            "uq_shared_tasks_active_pair",
            "task_id",
            "artist_id",
            unique=True,
            postgresql_where=_ACTIVE_PAIR_PREDICATE,
            sqlite_where=_ACTIVE_PAIR_PREDICATE,
        ),
        Index("ix_shared_tasks_artist_status", "artist_id", "status"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    studio_id: UUID = Field(foreign_key="users.id", index=True)
    artist_id: UUID = Field(foreign_key="users.id")
    access_level: str = Field(default=AccessLevel.VIEW.value, max_length=20)
    status: str = Field(default=GrantStatus.PENDING.value, max_length=20)
    notes: str | None = Field(default=None, max_length=1000)
    shared_at: datetime = Field(default_factory=utc_now)
    approved_at: datetime | None = Field(default=None)
    approved_by: UUID | None = Field(default=None, foreign_key="users.id")

    @property
    def status_enum(self) -> GrantStatus:
        return GrantStatus(self.status)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_GRANT_STATUSES
