"""Repository exports."""

from src.vfxflow.repositories.audit import AuditLogRepository
from src.vfxflow.repositories.base import BaseRepository
from src.vfxflow.repositories.pipeline import (
    SequenceRepository,
    ShotRepository,
    TaskRepository,
)
from src.vfxflow.repositories.project import ProjectRepository
from src.vfxflow.repositories.shared_task import SharedTaskRepository
from src.vfxflow.repositories.status_history import StatusHistoryRepository
from src.vfxflow.repositories.user import UserRepository

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "ProjectRepository",
    "SequenceRepository",
    "SharedTaskRepository",
    "ShotRepository",
    "StatusHistoryRepository",
    "TaskRepository",
    "UserRepository",
]
