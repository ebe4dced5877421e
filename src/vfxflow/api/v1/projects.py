"""Project lifecycle endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from src.vfxflow.api.dependencies import (
    CurrentUser,
    ProjectRepo,
    ProjectStatusServiceDep,
)
from src.vfxflow.models import MANAGER_ROLES, Project
from src.vfxflow.schemas import (
    AvailableTransitionsResponse,
    PaginatedResponse,
    ProjectCreate,
    ProjectRead,
    StatusChangeRequest,
    StatusHistoryListResponse,
    StatusHistoryRead,
    TransitionRead,
)
from src.vfxflow.workflow import status_color

router = APIRouter(prefix="/projects", tags=["projects"])

CursorQuery = Annotated[str | None, Query(description="Cursor for pagination")]
LimitQuery = Annotated[int, Query(ge=1, le=100, description="Max items to return")]


def _to_read(project: Project) -> ProjectRead:
    return ProjectRead(
        id=project.id,
        title=project.title,
        description=project.description,
        status=project.status,
        status_color=status_color(project.status),
        client_id=project.client_id,
        assigned_to=project.assigned_to,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
)
async def list_projects(
    project_repo: ProjectRepo,
    _user: CurrentUser,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    client_id: UUID | None = None,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await project_repo.list_all(
        cursor=cursor, limit=limit, status=status_filter, client_id=client_id
    )
    return PaginatedResponse(
        items=[_to_read(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created in draft"},
        403: {"description": "Only managers may create projects for another client"},
    },
)
async def create_project(
    request: ProjectCreate,
    actor: CurrentUser,
    service: ProjectStatusServiceDep,
) -> ProjectRead:
    """Create a project in ``draft``. The caller is the client unless a manager names one."""
    client_id = request.client_id or actor.id
    if client_id != actor.id and MANAGER_ROLES.isdisjoint(actor.roles):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only studio, producer or admin may create projects for another client",
        )
    project = await service.create_project(
        title=request.title,
        client_id=client_id,
        description=request.description,
        assigned_to=request.assigned_to,
        created_by=actor.id,
    )
    return _to_read(project)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: UUID,
    _user: CurrentUser,
    service: ProjectStatusServiceDep,
) -> ProjectRead:
    return _to_read(await service.get_project(project_id))


@router.get(
    "/{project_id}/transitions",
    response_model=AvailableTransitionsResponse,
    summary="Transitions available to the caller",
)
async def get_available_transitions(
    project_id: UUID,
    actor: CurrentUser,
    service: ProjectStatusServiceDep,
) -> AvailableTransitionsResponse:
    project, transitions = await service.available_transitions(project_id, actor.id, actor.roles)
    return AvailableTransitionsResponse(
        project_id=project.id,
        current_status=project.status,
        transitions=[
            TransitionRead(
                to_status=t.to_status,
                color=status_color(t.to_status),
                auto_notification=t.auto_notification,
            )
            for t in transitions
        ],
    )


@router.post(
    "/{project_id}/status",
    response_model=ProjectRead,
    summary="Change project status",
    responses={
        200: {"description": "Status changed and history appended"},
        403: {"description": "Transition denied"},
        404: {"description": "Project not found"},
        409: {"description": "Project changed since it was read"},
    },
)
async def change_status(
    project_id: UUID,
    request: StatusChangeRequest,
    actor: CurrentUser,
    service: ProjectStatusServiceDep,
) -> ProjectRead:
    project = await service.change_status(
        project_id=project_id,
        to_status=request.to_status,
        acting_user_id=actor.id,
        acting_roles=actor.roles,
        reason=request.reason,
        expected_status=request.expected_status,
    )
    return _to_read(project)


@router.get(
    "/{project_id}/history",
    response_model=StatusHistoryListResponse,
    summary="Project status history",
    responses={404: {"description": "Project not found"}},
)
async def get_history(
    project_id: UUID,
    _user: CurrentUser,
    service: ProjectStatusServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> StatusHistoryListResponse:
    """Status changes, newest first. The oldest entry records creation."""
    entries, next_cursor, has_more = await service.list_history_page(project_id, cursor, limit)
    return StatusHistoryListResponse(
        items=[StatusHistoryRead.model_validate(e) for e in entries],
        next_cursor=next_cursor,
        has_more=has_more,
    )
