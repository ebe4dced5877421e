"""Audit log schemas for API responses."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.vfxflow.schemas.pagination import PaginatedResponse


class AuditLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID | None
    action: str
    entity_type: str
    entity_id: UUID | None
    changes: dict[str, Any] | None
    request_id: str | None
    status: str
    error_message: str | None
    created_at: datetime


AuditLogListResponse = PaginatedResponse[AuditLogRead]
