"""The artist's view of studio work shared with them."""

from uuid import UUID

from fastapi import APIRouter

from src.vfxflow.api.dependencies import ArtistUser, VisibilityServiceDep
from src.vfxflow.schemas import SequenceRead, ShotRead, VisibleTaskRead

router = APIRouter(prefix="/artists/me", tags=["artist views"])


@router.get(
    "/projects/{project_id}/sequences",
    response_model=list[SequenceRead],
    summary="Sequences with work shared with me",
)
async def my_sequences(
    project_id: UUID,
    artist: ArtistUser,
    service: VisibilityServiceDep,
) -> list[SequenceRead]:
    sequences = await service.visible_sequences_for_artist(artist.id, project_id)
    return [SequenceRead.model_validate(s) for s in sequences]


@router.get(
    "/sequences/{sequence_id}/shots",
    response_model=list[ShotRead],
    summary="Shots with work shared with me",
)
async def my_shots(
    sequence_id: UUID,
    artist: ArtistUser,
    service: VisibilityServiceDep,
) -> list[ShotRead]:
    shots = await service.visible_shots_for_artist(artist.id, sequence_id)
    return [ShotRead.model_validate(s) for s in shots]


@router.get(
    "/shots/{shot_id}/tasks",
    response_model=list[VisibleTaskRead],
    summary="Tasks shared with me",
)
async def my_tasks(
    shot_id: UUID,
    artist: ArtistUser,
    service: VisibilityServiceDep,
) -> list[VisibleTaskRead]:
    visible = await service.visible_tasks_for_artist(artist.id, shot_id)
    return [
        VisibleTaskRead(
            id=v.task.id,
            shot_id=v.task.shot_id,
            name=v.task.name,
            task_type=v.task.task_type,
            status=v.task.status,
            priority=v.task.priority,
            access_level=v.access_level,
        )
        for v in visible
    ]
