"""Repository for Project entity."""

from typing import Any, cast
from uuid import UUID

from sqlalchemy.engine import CursorResult
from sqlmodel import select, update

from src.vfxflow.models import Project
from src.vfxflow.models.base import utc_now
from src.vfxflow.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_all(
        self,
        cursor: str | None = None,
        limit: int = 100,
        status: str | None = None,
        client_id: UUID | None = None,
    ) -> tuple[list[Project], str | None, bool]:
        """List projects with cursor-based pagination.

        Args:
            cursor: Optional cursor for pagination
            limit: Maximum number of results
            status: Optional status filter
            client_id: Optional owner filter

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        query = select(Project)
        if status:
            query = query.where(Project.status == status)
        if client_id:
            query = query.where(Project.client_id == client_id)
        return await self.paginate(query, cursor, limit, Project.created_at)

    async def compare_and_set_status(
        self,
        project_id: UUID,
        expected_status: str,
        new_status: str,
        updated_at: Any = None,
    ) -> bool:
        """Set ``status`` only if the stored status still equals ``expected_status``.

        Returns:
            True if the row was updated, False if the precondition failed
        """
        result = await self.session.execute(
            update(Project)
            .where(Project.id == project_id)  # type: ignore[arg-type]
            .where(Project.status == expected_status)  # type: ignore[arg-type]
            .values(status=new_status, updated_at=updated_at or utc_now())
            .execution_options(synchronize_session=False)
        )
        return (cast(CursorResult[Any], result).rowcount or 0) == 1
