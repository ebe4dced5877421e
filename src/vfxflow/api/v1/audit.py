"""Audit trail endpoints (admin only)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.vfxflow.api.dependencies import AdminUser, AuditServiceDep
from src.vfxflow.schemas import AuditLogListResponse, AuditLogRead

router = APIRouter(prefix="/audit", tags=["audit"])

CursorQuery = Annotated[str | None, Query(description="Cursor for pagination")]
LimitQuery = Annotated[int, Query(ge=1, le=100, description="Max items to return")]


@router.get(
    "/entity/{entity_type}/{entity_id}",
    response_model=AuditLogListResponse,
    responses={
        200: {"description": "Audit history for entity"},
        403: {"description": "Admin access required"},
    },
)
async def get_entity_history(
    _: AdminUser,
    audit_service: AuditServiceDep,
    entity_type: str,
    entity_id: UUID,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> AuditLogListResponse:
    """Audit entries for one project or grant, newest first.

    Includes denied attempts, which never reach the status history.
    """
    logs, next_cursor, has_more = await audit_service.list_entity_history(
        entity_type=entity_type,
        entity_id=entity_id,
        cursor=cursor,
        limit=limit,
    )
    return AuditLogListResponse(
        items=[AuditLogRead.model_validate(log) for log in logs],
        next_cursor=next_cursor,
        has_more=has_more,
    )
