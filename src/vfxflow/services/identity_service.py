"""Identity lookups used by the workflow services."""

from dataclasses import dataclass
from uuid import UUID

from src.vfxflow.repositories import UserRepository


@dataclass(frozen=True)
class FoundUser:
    id: UUID
    email: str
    full_name: str
    is_active: bool
    roles: frozenset[str]


@dataclass(frozen=True)
class UserNotFound:
    handle: str


type UserLookup = FoundUser | UserNotFound


class IdentityService:
    """Resolves contact handles to users and reports the roles they hold."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def find_user_by_handle(self, handle: str) -> UserLookup:
        """Look up a user by contact handle (email).

        Matching ignores case and surrounding whitespace. A miss is a value,
        not an exception.
        """
        normalized = handle.strip()
        if not normalized:
            return UserNotFound(handle=handle)

        user = await self.user_repo.get_by_email(normalized)
        if user is None:
            return UserNotFound(handle=handle)

        roles = await self.user_repo.get_roles(user.id)
        return FoundUser(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            is_active=user.is_active,
            roles=frozenset(roles),
        )

    async def get_roles(self, user_id: UUID) -> set[str]:
        return await self.user_repo.get_roles(user_id)
