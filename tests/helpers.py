"""Test helper functions for common data creation patterns."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.vfxflow.core.security import create_access_token
from src.vfxflow.models import AppRole, Sequence, Shot, Task, User
from tests.factories import (
    SequenceFactory,
    ShotFactory,
    TaskFactory,
    UserFactory,
    UserRoleFactory,
)


async def create_user_with_roles(
    session: AsyncSession,
    *roles: AppRole,
    **user_kwargs,
) -> User:
    """Create a user holding the given roles and commit.

    Args:
        session: Database session
        *roles: Roles to grant (none is allowed)
        **user_kwargs: Additional args passed to UserFactory
    """
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.flush()
    for role in roles:
        session.add(UserRoleFactory.build(user_id=user.id, role=role.value))
    await session.commit()
    return user


@dataclass
class Breakdown:
    sequence: Sequence
    shot: Shot
    task: Task


async def create_breakdown(session: AsyncSession, project_id, **task_kwargs) -> Breakdown:
    """Create one sequence > shot > task chain under a project and commit."""
    sequence = SequenceFactory.build(project_id=project_id)
    session.add(sequence)
    await session.flush()
    shot = ShotFactory.build(sequence_id=sequence.id)
    session.add(shot)
    await session.flush()
    task = TaskFactory.build(shot_id=shot.id, **task_kwargs)
    session.add(task)
    await session.commit()
    return Breakdown(sequence=sequence, shot=shot, task=task)


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header carrying a fresh access token for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}
