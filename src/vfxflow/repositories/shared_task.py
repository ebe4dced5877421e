"""Repository for SharedTask grants."""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy.engine import CursorResult
from sqlmodel import col, select, update

from src.vfxflow.models import ACTIVE_GRANT_STATUSES, GrantStatus, SharedTask
from src.vfxflow.repositories.base import BaseRepository


class SharedTaskRepository(BaseRepository[SharedTask]):
    """Repository for task sharing grants.

    State changes are conditional updates guarded by ``status = 'pending'``
    so that two concurrent decisions cannot both succeed.
    """

    model = SharedTask

    async def get_active_for_pair(self, task_id: UUID, artist_id: UUID) -> SharedTask | None:
        """The pending or approved grant for (task, artist), if any."""
        result = await self.session.execute(
            select(SharedTask).where(
                SharedTask.task_id == task_id,
                SharedTask.artist_id == artist_id,
                col(SharedTask.status).in_(ACTIVE_GRANT_STATUSES),
            )
        )
        return result.scalar_one_or_none()

    async def list_by_artist(
        self, artist_id: UUID, status: str | None = None
    ) -> list[SharedTask]:
        """Grants addressed to an artist, newest first."""
        query = select(SharedTask).where(SharedTask.artist_id == artist_id)
        if status:
            query = query.where(SharedTask.status == status)
        result = await self.session.execute(query.order_by(col(SharedTask.shared_at).desc()))
        return list(result.scalars().all())

    async def list_by_studio(
        self, studio_id: UUID, status: str | None = None
    ) -> list[SharedTask]:
        """Grants issued by a studio, newest first."""
        query = select(SharedTask).where(SharedTask.studio_id == studio_id)
        if status:
            query = query.where(SharedTask.status == status)
        result = await self.session.execute(query.order_by(col(SharedTask.shared_at).desc()))
        return list(result.scalars().all())

    async def resolve_pending(
        self,
        grant_id: UUID,
        new_status: GrantStatus,
        decided_by: UUID,
        decided_at: datetime,
    ) -> bool:
        """Move a pending grant to approved or rejected.

        ``approved_at``/``approved_by`` are only stamped on approval.

        Returns:
            True if the grant was still pending and has been updated
        """
        values: dict[str, Any] = {"status": new_status.value}
        if new_status == GrantStatus.APPROVED:
            values["approved_at"] = decided_at
            values["approved_by"] = decided_by
        return await self._update_if_pending(grant_id, values)

    async def update_pending(
        self,
        grant_id: UUID,
        access_level: str | None = None,
        notes: str | None = None,
    ) -> bool:
        """Change access level and/or notes on a grant that is still pending."""
        values: dict[str, Any] = {}
        if access_level is not None:
            values["access_level"] = access_level
        if notes is not None:
            values["notes"] = notes
        if not values:
            # Nothing to write, but the pending precondition still applies
            grant = await self.get_by_id(grant_id, fresh=True)
            return grant is not None and grant.status == GrantStatus.PENDING.value
        return await self._update_if_pending(grant_id, values)

    async def _update_if_pending(self, grant_id: UUID, values: dict[str, Any]) -> bool:
        result = await self.session.execute(
            update(SharedTask)
            .where(SharedTask.id == grant_id)  # type: ignore[arg-type]
            .where(SharedTask.status == GrantStatus.PENDING.value)  # type: ignore[arg-type]
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return (cast(CursorResult[Any], result).rowcount or 0) == 1
