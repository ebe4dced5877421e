from src.vfxflow.schemas.audit import AuditLogListResponse, AuditLogRead
from src.vfxflow.schemas.pagination import PaginatedResponse
from src.vfxflow.schemas.project import (
    AvailableTransitionsResponse,
    ProjectCreate,
    ProjectRead,
    StatusChangeRequest,
    StatusHistoryListResponse,
    StatusHistoryRead,
    StatusRead,
    TransitionRead,
)
from src.vfxflow.schemas.sharing import (
    ArtistLookupResponse,
    GrantDecisionRequest,
    GrantUpdate,
    SharedTaskRead,
    ShareTaskRequest,
)
from src.vfxflow.schemas.visibility import SequenceRead, ShotRead, VisibleTaskRead

__all__ = [
    # Audit
    "AuditLogListResponse",
    "AuditLogRead",
    # Pagination
    "PaginatedResponse",
    # Projects
    "AvailableTransitionsResponse",
    "ProjectCreate",
    "ProjectRead",
    "StatusChangeRequest",
    "StatusHistoryListResponse",
    "StatusHistoryRead",
    "StatusRead",
    "TransitionRead",
    # Sharing
    "ArtistLookupResponse",
    "GrantDecisionRequest",
    "GrantUpdate",
    "SharedTaskRead",
    "ShareTaskRequest",
    # Visibility
    "SequenceRead",
    "ShotRead",
    "VisibleTaskRead",
]
