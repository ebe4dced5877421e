"""FastAPI dependency injection definitions."""

from src.vfxflow.api.dependencies.auth import (
    Actor,
    AdminUser,
    ArtistUser,
    CurrentUser,
    ManagerUser,
    get_current_user,
    require_admin,
    require_artist,
    require_manager,
)
from src.vfxflow.api.dependencies.db import DBSession, get_db_session
from src.vfxflow.api.dependencies.repositories import (
    ProjectRepo,
    SequenceRepo,
    SharedTaskRepo,
    ShotRepo,
    StatusHistoryRepo,
    TaskRepo,
    UserRepo,
)
from src.vfxflow.api.dependencies.services import (
    AuditServiceDep,
    IdentityServiceDep,
    ProjectStatusServiceDep,
    TaskSharingServiceDep,
    VisibilityServiceDep,
    get_audit_service,
    get_identity_service,
    get_project_status_service,
    get_task_sharing_service,
    get_visibility_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "Actor",
    "AdminUser",
    "ArtistUser",
    "CurrentUser",
    "ManagerUser",
    "get_current_user",
    "require_admin",
    "require_artist",
    "require_manager",
    # Repositories
    "ProjectRepo",
    "SequenceRepo",
    "SharedTaskRepo",
    "ShotRepo",
    "StatusHistoryRepo",
    "TaskRepo",
    "UserRepo",
    # Services
    "AuditServiceDep",
    "IdentityServiceDep",
    "ProjectStatusServiceDep",
    "TaskSharingServiceDep",
    "VisibilityServiceDep",
    "get_audit_service",
    "get_identity_service",
    "get_project_status_service",
    "get_task_sharing_service",
    "get_visibility_service",
]
