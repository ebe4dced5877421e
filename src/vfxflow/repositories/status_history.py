"""Repository for the append-only project status history."""

from uuid import UUID

from sqlmodel import col, select

from src.vfxflow.models import ProjectStatusHistory
from src.vfxflow.repositories.base import BaseRepository


class StatusHistoryRepository(BaseRepository[ProjectStatusHistory]):
    """Read access plus append. Entries are never updated or deleted."""

    model = ProjectStatusHistory

    async def list_by_project(self, project_id: UUID) -> list[ProjectStatusHistory]:
        """All entries for a project, newest first."""
        result = await self.session.execute(
            select(ProjectStatusHistory)
            .where(ProjectStatusHistory.project_id == project_id)
            .order_by(
                col(ProjectStatusHistory.created_at).desc(),
                col(ProjectStatusHistory.id).desc(),
            )
        )
        return list(result.scalars().all())

    async def list_by_project_paginated(
        self,
        project_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ProjectStatusHistory], str | None, bool]:
        """Entries for a project with cursor pagination, newest first."""
        query = select(ProjectStatusHistory).where(
            ProjectStatusHistory.project_id == project_id
        )
        return await self.paginate(query, cursor, limit, ProjectStatusHistory.created_at)

    async def get_latest(self, project_id: UUID) -> ProjectStatusHistory | None:
        result = await self.session.execute(
            select(ProjectStatusHistory)
            .where(ProjectStatusHistory.project_id == project_id)
            .order_by(
                col(ProjectStatusHistory.created_at).desc(),
                col(ProjectStatusHistory.id).desc(),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()
