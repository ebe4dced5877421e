"""Base repository with common data access operations."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.vfxflow.schemas.pagination import decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID, *, fresh: bool = False) -> ModelType | None:
        """Get a record by its primary key.

        With ``fresh=True`` the row is re-read from the database and overwrites
        any copy already held in the session.
        """
        query = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        if fresh:
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query, newest first.

        Args:
            query: The base SQLAlchemy query to paginate
            cursor: Optional cursor from previous page (base64-encoded)
            limit: Maximum number of items to return
            cursor_field: The field to use for cursor (e.g., created_at)

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                cursor_str = decode_cursor(cursor)
                cursor_value: datetime | UUID | str
                try:
                    cursor_value = datetime.fromisoformat(cursor_str)
                except ValueError:
                    try:
                        cursor_value = UUID(cursor_str)
                    except ValueError:
                        cursor_value = cursor_str
                query = query.where(cursor_field < cursor_value)
            except (ValueError, TypeError):
                # Invalid cursor - ignore and start from beginning
                pass

        query = query.order_by(cursor_field.desc())

        # Fetch limit + 1 to determine if there are more results
        query = query.limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            if isinstance(value, datetime):
                next_cursor = encode_cursor(value.isoformat())
            elif value is not None:
                next_cursor = encode_cursor(str(value))

        return items, next_cursor, has_more
