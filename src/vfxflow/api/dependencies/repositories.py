"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.vfxflow.api.dependencies.db import DBSession
from src.vfxflow.repositories import (
    ProjectRepository,
    SequenceRepository,
    SharedTaskRepository,
    ShotRepository,
    StatusHistoryRepository,
    TaskRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_status_history_repository(session: DBSession) -> StatusHistoryRepository:
    return StatusHistoryRepository(session)


def get_shared_task_repository(session: DBSession) -> SharedTaskRepository:
    return SharedTaskRepository(session)


def get_sequence_repository(session: DBSession) -> SequenceRepository:
    return SequenceRepository(session)


def get_shot_repository(session: DBSession) -> ShotRepository:
    return ShotRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
StatusHistoryRepo = Annotated[StatusHistoryRepository, Depends(get_status_history_repository)]
SharedTaskRepo = Annotated[SharedTaskRepository, Depends(get_shared_task_repository)]
SequenceRepo = Annotated[SequenceRepository, Depends(get_sequence_repository)]
ShotRepo = Annotated[ShotRepository, Depends(get_shot_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
