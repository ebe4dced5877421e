"""Model exports.

Import from here: `from src.vfxflow.models import Project, SharedTask`
"""

# Enums
from src.vfxflow.models.audit import AuditAction, AuditLog, AuditStatus
from src.vfxflow.models.enums import (
    ACTIVE_GRANT_STATUSES,
    MANAGER_ROLES,
    AccessLevel,
    AppRole,
    GrantDecision,
    GrantStatus,
    ProjectStatus,
)

# Tables
from src.vfxflow.models.pipeline import Sequence, Shot, Task
from src.vfxflow.models.project import Project, ProjectStatusHistory
from src.vfxflow.models.sharing import SharedTask
from src.vfxflow.models.user import User, UserRole

__all__ = [
    # Enums
    "ACTIVE_GRANT_STATUSES",
    "MANAGER_ROLES",
    "AccessLevel",
    "AppRole",
    "AuditAction",
    "AuditStatus",
    "GrantDecision",
    "GrantStatus",
    "ProjectStatus",
    # Tables
    "AuditLog",
    "Project",
    "ProjectStatusHistory",
    "Sequence",
    "SharedTask",
    "Shot",
    "Task",
    "User",
    "UserRole",
]
