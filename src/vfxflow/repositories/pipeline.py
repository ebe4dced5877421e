"""Repositories for sequences, shots and tasks.

The ``list_visible_to_artist`` queries only follow approved grants; a pending,
rejected or revoked grant exposes nothing.
"""

from typing import Any
from uuid import UUID

from sqlmodel import col, select

from src.vfxflow.models import GrantStatus, Sequence, SharedTask, Shot, Task
from src.vfxflow.repositories.base import BaseRepository


def _approved_for(artist_id: UUID) -> tuple[Any, Any]:
    return (
        SharedTask.artist_id == artist_id,
        SharedTask.status == GrantStatus.APPROVED.value,
    )


class SequenceRepository(BaseRepository[Sequence]):
    model = Sequence

    async def list_visible_to_artist(self, artist_id: UUID, project_id: UUID) -> list[Sequence]:
        """Sequences of a project holding at least one task shared with the artist."""
        result = await self.session.execute(
            select(Sequence)
            .join(Shot, col(Shot.sequence_id) == col(Sequence.id))
            .join(Task, col(Task.shot_id) == col(Shot.id))
            .join(SharedTask, col(SharedTask.task_id) == col(Task.id))
            .where(Sequence.project_id == project_id, *_approved_for(artist_id))
            .distinct()
            .order_by(col(Sequence.order_index), col(Sequence.name))
        )
        return list(result.scalars().all())


class ShotRepository(BaseRepository[Shot]):
    model = Shot

    async def list_visible_to_artist(self, artist_id: UUID, sequence_id: UUID) -> list[Shot]:
        """Shots of a sequence holding at least one task shared with the artist."""
        result = await self.session.execute(
            select(Shot)
            .join(Task, col(Task.shot_id) == col(Shot.id))
            .join(SharedTask, col(SharedTask.task_id) == col(Task.id))
            .where(Shot.sequence_id == sequence_id, *_approved_for(artist_id))
            .distinct()
            .order_by(col(Shot.name))
        )
        return list(result.scalars().all())


class TaskRepository(BaseRepository[Task]):
    model = Task

    async def list_visible_to_artist(
        self, artist_id: UUID, shot_id: UUID
    ) -> list[tuple[Task, str]]:
        """Tasks of a shot shared with the artist, each with its granted access level."""
        result = await self.session.execute(
            select(Task, SharedTask.access_level)
            .join(SharedTask, col(SharedTask.task_id) == col(Task.id))
            .where(Task.shot_id == shot_id, *_approved_for(artist_id))
            .order_by(col(Task.name))
        )
        return [(task, access_level) for task, access_level in result.all()]
