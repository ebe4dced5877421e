"""Task sharing endpoints: share, amend, decide, list."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.vfxflow.api.dependencies import (
    CurrentUser,
    ManagerUser,
    TaskSharingServiceDep,
)
from src.vfxflow.models import MANAGER_ROLES, GrantStatus
from src.vfxflow.schemas import (
    ArtistLookupResponse,
    GrantDecisionRequest,
    GrantUpdate,
    SharedTaskRead,
    ShareTaskRequest,
)

router = APIRouter(tags=["sharing"])


@router.get(
    "/artists/lookup",
    response_model=ArtistLookupResponse,
    summary="Resolve an artist by contact handle",
    responses={404: {"description": "No active artist with this handle"}},
)
async def lookup_artist(
    _user: ManagerUser,
    service: TaskSharingServiceDep,
    handle: Annotated[str, Query(min_length=1, max_length=255)],
) -> ArtistLookupResponse:
    artist_id = await service.resolve_artist_by_handle(handle)
    return ArtistLookupResponse(handle=handle.strip(), artist_id=artist_id)


@router.post(
    "/tasks/{task_id}/shares",
    response_model=SharedTaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Share a task with an artist",
    responses={
        201: {"description": "Grant created, awaiting the artist's decision"},
        404: {"description": "Task not found, or the grantee is not an active artist"},
        409: {"description": "Task already shared with this artist"},
    },
)
async def share_task(
    task_id: UUID,
    request: ShareTaskRequest,
    actor: ManagerUser,
    service: TaskSharingServiceDep,
) -> SharedTaskRead:
    if request.artist_id is not None:
        artist_id = request.artist_id
    else:
        artist_id = await service.resolve_artist_by_handle(request.artist_handle or "")

    grant = await service.share_task(
        task_id=task_id,
        artist_id=artist_id,
        access_level=request.access_level,
        notes=request.notes,
        granted_by=actor.id,
    )
    return SharedTaskRead.model_validate(grant)


@router.get(
    "/shares",
    response_model=list[SharedTaskRead],
    summary="List my grants",
)
async def list_shares(
    actor: CurrentUser,
    service: TaskSharingServiceDep,
    status_filter: Annotated[GrantStatus | None, Query(alias="status")] = None,
) -> list[SharedTaskRead]:
    """Grants I issued (managers) followed by grants addressed to me."""
    grants = []
    if not MANAGER_ROLES.isdisjoint(actor.roles):
        grants.extend(await service.list_grants_for_studio(actor.id, status_filter))
    grants.extend(await service.list_grants_for_artist(actor.id, status_filter))

    seen: set[UUID] = set()
    unique = []
    for grant in grants:
        if grant.id not in seen:
            seen.add(grant.id)
            unique.append(grant)
    return [SharedTaskRead.model_validate(g) for g in unique]


@router.patch(
    "/shares/{grant_id}",
    response_model=SharedTaskRead,
    summary="Amend a pending grant",
    responses={
        403: {"description": "Only the issuing studio or an admin may amend a grant"},
        404: {"description": "Grant not found"},
        409: {"description": "Grant is no longer pending"},
    },
)
async def update_share(
    grant_id: UUID,
    request: GrantUpdate,
    actor: ManagerUser,
    service: TaskSharingServiceDep,
) -> SharedTaskRead:
    grant = await service.update_pending_grant(
        grant_id,
        updated_by=actor.id,
        updater_roles=actor.roles,
        access_level=request.access_level,
        notes=request.notes,
    )
    return SharedTaskRead.model_validate(grant)


@router.post(
    "/shares/{grant_id}/decision",
    response_model=SharedTaskRead,
    summary="Approve or reject a pending grant",
    responses={
        403: {"description": "Caller may not decide on this grant"},
        404: {"description": "Grant not found"},
        409: {"description": "Grant already resolved"},
    },
)
async def decide_share(
    grant_id: UUID,
    request: GrantDecisionRequest,
    actor: CurrentUser,
    service: TaskSharingServiceDep,
) -> SharedTaskRead:
    grant = await service.resolve_grant(
        grant_id,
        decision=request.decision,
        decided_by=actor.id,
        decider_roles=actor.roles,
    )
    return SharedTaskRead.model_validate(grant)
