"""Audit log model for tracking workflow actions."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.vfxflow.models.base import utc_now


class AuditAction(str, Enum):
    """Audit action types for type-safe logging."""

    # Project
    PROJECT_CREATE = "project.create"
    PROJECT_STATUS_CHANGE = "project.status_change"

    # Sharing
    TASK_SHARE = "task.share"
    GRANT_UPDATE = "grant.update"
    GRANT_APPROVE = "grant.approve"
    GRANT_REJECT = "grant.reject"


class AuditStatus(str, Enum):
    """Audit log status."""

    SUCCESS = "success"
    FAILURE = "failure"


class AuditLog(SQLModel, table=True):
    """Audit log for workflow actions, including denied attempts."""

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_user_created", "user_id", "created_at"),
        Index("ix_audit_logs_action_created", "action", "created_at"),
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Context
    user_id: UUID | None = Field(foreign_key="users.id", index=True, default=None)

    # Action details
    action: str = Field(max_length=50)  # AuditAction value
    entity_type: str = Field(max_length=50)  # "project", "shared_task"
    entity_id: UUID | None = Field(default=None)

    # Change tracking
    changes: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSON().with_variant(JSONB, "postgresql"), nullable=True),
    )

    # Request metadata
    ip_address: str | None = Field(max_length=45, default=None)
    user_agent: str | None = Field(max_length=500, default=None)
    request_id: str | None = Field(max_length=36, default=None)

    # Result
    status: str = Field(default=AuditStatus.SUCCESS.value, max_length=20)
    error_message: str | None = Field(max_length=1000, default=None)

    created_at: datetime = Field(default_factory=utc_now)
