"""Repository for User and UserRole entities."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.vfxflow.models import User, UserRole
from src.vfxflow.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for users and the roles they hold."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address, ignoring case and surrounding whitespace."""
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_roles(self, user_id: UUID) -> set[str]:
        """All roles held by a user."""
        result = await self.session.execute(
            select(UserRole.role).where(UserRole.user_id == user_id)
        )
        return set(result.scalars().all())

    async def get_many(self, user_ids: list[UUID]) -> list[User]:
        if not user_ids:
            return []
        result = await self.session.execute(
            select(User).where(User.id.in_(user_ids))  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    def add_role(self, user_id: UUID, role: str) -> UserRole:
        """Grant a role (no flush/commit)."""
        user_role = UserRole(user_id=user_id, role=role)
        self.session.add(user_role)
        return user_role
