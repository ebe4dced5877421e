"""Shared enums for models."""

from enum import Enum


class AppRole(str, Enum):
    """Platform role a user can hold. A user may hold several."""

    ARTIST = "artist"
    STUDIO = "studio"
    PRODUCER = "producer"
    ADMIN = "admin"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    DRAFT = "draft"
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AccessLevel(str, Enum):
    """Capability ceiling a shared task grant confers on its artist."""

    VIEW = "view"
    COMMENT = "comment"
    EDIT = "edit"


class GrantStatus(str, Enum):
    """Shared task grant status.

    REVOKED is reserved: no operation produces it yet, and it is never active.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVOKED = "revoked"


ACTIVE_GRANT_STATUSES = (GrantStatus.PENDING.value, GrantStatus.APPROVED.value)


class GrantDecision(str, Enum):
    """Decision taken on a pending grant."""

    APPROVE = "approve"
    REJECT = "reject"


# Roles that manage production work: create projects for clients, run most
# transitions, and issue task shares.
MANAGER_ROLES = frozenset({AppRole.STUDIO.value, AppRole.PRODUCER.value, AppRole.ADMIN.value})
