"""Service exports."""

from src.vfxflow.services.audit_service import AuditService
from src.vfxflow.services.identity_service import (
    FoundUser,
    IdentityService,
    UserLookup,
    UserNotFound,
)
from src.vfxflow.services.project_status_service import ProjectStatusService
from src.vfxflow.services.task_sharing_service import TaskSharingService
from src.vfxflow.services.visibility_service import VisibilityService, VisibleTask

__all__ = [
    "AuditService",
    "FoundUser",
    "IdentityService",
    "ProjectStatusService",
    "TaskSharingService",
    "UserLookup",
    "UserNotFound",
    "VisibilityService",
    "VisibleTask",
]
