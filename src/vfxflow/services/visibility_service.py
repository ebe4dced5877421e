"""What an artist can see of a studio's breakdown through approved grants."""

from dataclasses import dataclass
from uuid import UUID

from src.vfxflow.models import Sequence, Shot, Task
from src.vfxflow.repositories import SequenceRepository, ShotRepository, TaskRepository


@dataclass(frozen=True)
class VisibleTask:
    task: Task
    access_level: str


class VisibilityService:
    """Derives visible sequences, shots and tasks on every call.

    Nothing is cached: approving or rejecting a grant is reflected by the
    next query.
    """

    def __init__(
        self,
        sequence_repo: SequenceRepository,
        shot_repo: ShotRepository,
        task_repo: TaskRepository,
    ):
        self.sequence_repo = sequence_repo
        self.shot_repo = shot_repo
        self.task_repo = task_repo

    async def visible_sequences_for_artist(
        self, artist_id: UUID, project_id: UUID
    ) -> list[Sequence]:
        return await self.sequence_repo.list_visible_to_artist(artist_id, project_id)

    async def visible_shots_for_artist(self, artist_id: UUID, sequence_id: UUID) -> list[Shot]:
        """Shots under ``sequence_id`` with at least one task approved for the artist."""
        return await self.shot_repo.list_visible_to_artist(artist_id, sequence_id)

    async def visible_tasks_for_artist(self, artist_id: UUID, shot_id: UUID) -> list[VisibleTask]:
        rows = await self.task_repo.list_visible_to_artist(artist_id, shot_id)
        return [VisibleTask(task=task, access_level=level) for task, level in rows]
