"""Test factories for generating test data.

    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import ProjectFactory, SequenceFactory, ShotFactory, TaskFactory
from tests.factories.sharing import SharedTaskFactory
from tests.factories.user import UserFactory, UserRoleFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Users
    "UserFactory",
    "UserRoleFactory",
    # Projects
    "ProjectFactory",
    "SequenceFactory",
    "ShotFactory",
    "TaskFactory",
    # Sharing
    "SharedTaskFactory",
]
