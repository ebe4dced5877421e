"""Audit logging service - records workflow actions, including denied ones."""

import contextlib
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.vfxflow.core.audit_context import get_audit_context
from src.vfxflow.core.logging import get_logger
from src.vfxflow.models import AuditAction, AuditLog, AuditStatus
from src.vfxflow.repositories import AuditLogRepository

logger = get_logger(__name__)


class AuditService:
    """Service for recording audit logs.

    Runs on its own session and never raises: a failed audit write must not
    undo or block the business operation it describes.
    """

    def __init__(self, audit_repo: AuditLogRepository, session: AsyncSession):
        self.audit_repo = audit_repo
        self.session = session

    async def log_action(
        self,
        action: AuditAction | str,
        entity_type: str,
        entity_id: UUID | None = None,
        user_id: UUID | None = None,
        changes: dict[str, Any] | None = None,
        status: AuditStatus = AuditStatus.SUCCESS,
        error_message: str | None = None,
    ) -> AuditLog | None:
        """Record an audit log entry.

        Request metadata (IP, user agent, request_id) comes from the audit
        context set by middleware.

        Returns:
            The created AuditLog, or None if logging failed
        """
        action_value = action.value if isinstance(action, AuditAction) else action
        try:
            ctx = get_audit_context()
            audit_log = AuditLog(
                user_id=user_id,
                action=action_value,
                entity_type=entity_type,
                entity_id=entity_id,
                changes=changes,
                ip_address=ctx.ip_address if ctx else None,
                user_agent=ctx.user_agent if ctx else None,
                request_id=ctx.request_id if ctx else None,
                status=status.value if isinstance(status, AuditStatus) else status,
                error_message=error_message[:1000] if error_message else None,
            )
            self.audit_repo.add(audit_log)
            await self.session.commit()

            logger.debug(
                "Audit log recorded",
                action=action_value,
                entity_type=entity_type,
                entity_id=str(entity_id) if entity_id else None,
            )
            return audit_log

        except Exception as e:
            logger.warning(
                "Failed to record audit log",
                action=action_value,
                entity_type=entity_type,
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

    async def log_success(
        self,
        action: AuditAction | str,
        entity_type: str,
        entity_id: UUID | None = None,
        user_id: UUID | None = None,
        changes: dict[str, Any] | None = None,
    ) -> AuditLog | None:
        return await self.log_action(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            changes=changes,
            status=AuditStatus.SUCCESS,
        )

    async def log_failure(
        self,
        action: AuditAction | str,
        entity_type: str,
        error_message: str,
        entity_id: UUID | None = None,
        user_id: UUID | None = None,
        changes: dict[str, Any] | None = None,
    ) -> AuditLog | None:
        return await self.log_action(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            changes=changes,
            status=AuditStatus.FAILURE,
            error_message=error_message,
        )

    async def list_entity_history(
        self,
        entity_type: str,
        entity_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[AuditLog], str | None, bool]:
        """List audit logs for a specific entity, newest first."""
        return await self.audit_repo.list_by_entity(
            entity_type=entity_type,
            entity_id=entity_id,
            cursor=cursor,
            limit=limit,
        )
