"""Authentication and role dependencies.

Access tokens are issued elsewhere; this module only verifies them and
loads the caller's roles.
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.vfxflow.api.dependencies.repositories import UserRepo
from src.vfxflow.core.logging import bind_user_context
from src.vfxflow.core.security import ACCESS_TOKEN_TYPE, decode_token
from src.vfxflow.models import MANAGER_ROLES, AppRole, User



@dataclass(frozen=True)
class Actor:
    """The authenticated caller and every role they hold."""

    user: User
    roles: frozenset[str]

    @property
    def id(self) -> UUID:
        return self.user.id

    def has_role(self, role: AppRole) -> bool:
        return role.value in self.roles


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def get_current_user(
    user_repo: UserRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> Actor:
    """Validate the bearer token and return the caller with their roles."""
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _unauthorized("Invalid token type")

    subject = payload.get("sub")
    if not subject:
        raise _unauthorized("Invalid token payload")

    try:
        user_id = UUID(subject)
    except ValueError as e:
        raise _unauthorized("Invalid user_id in token") from e

    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    roles = frozenset(await user_repo.get_roles(user.id))
    bind_user_context(user.id, list(roles), user.email)
    return Actor(user=user, roles=roles)


CurrentUser = Annotated[Actor, Depends(get_current_user)]


async def require_manager(actor: CurrentUser) -> Actor:
    """Studio, producer or admin."""
    if MANAGER_ROLES.isdisjoint(actor.roles):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Studio, producer or admin role required",
        )
    return actor


ManagerUser = Annotated[Actor, Depends(require_manager)]


async def require_artist(actor: CurrentUser) -> Actor:
    if not actor.has_role(AppRole.ARTIST):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Artist role required",
        )
    return actor


ArtistUser = Annotated[Actor, Depends(require_artist)]


async def require_admin(actor: CurrentUser) -> Actor:
    if not actor.has_role(AppRole.ADMIN):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required for this operation",
        )
    return actor


AdminUser = Annotated[Actor, Depends(require_admin)]
