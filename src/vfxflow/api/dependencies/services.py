"""Service factory dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from src.vfxflow.api.dependencies.db import DBSession
from src.vfxflow.api.dependencies.repositories import (
    ProjectRepo,
    SequenceRepo,
    SharedTaskRepo,
    ShotRepo,
    StatusHistoryRepo,
    TaskRepo,
    UserRepo,
)
from src.vfxflow.core.db import get_session
from src.vfxflow.repositories import AuditLogRepository
from src.vfxflow.services import (
    AuditService,
    IdentityService,
    ProjectStatusService,
    TaskSharingService,
    VisibilityService,
)


async def get_audit_service() -> AsyncGenerator[AuditService]:
    """Get audit service with its own isolated session.

    Audit entries commit independently, so a denied or rolled-back
    operation still leaves its audit trail.
    """
    async with get_session() as session:
        yield AuditService(AuditLogRepository(session), session)


AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]


def get_identity_service(user_repo: UserRepo) -> IdentityService:
    return IdentityService(user_repo)


IdentityServiceDep = Annotated[IdentityService, Depends(get_identity_service)]


def get_project_status_service(
    project_repo: ProjectRepo,
    history_repo: StatusHistoryRepo,
    user_repo: UserRepo,
    session: DBSession,
    audit_service: AuditServiceDep,
) -> ProjectStatusService:
    return ProjectStatusService(project_repo, history_repo, user_repo, session, audit_service)


def get_task_sharing_service(
    shared_task_repo: SharedTaskRepo,
    task_repo: TaskRepo,
    user_repo: UserRepo,
    identity_service: IdentityServiceDep,
    session: DBSession,
    audit_service: AuditServiceDep,
) -> TaskSharingService:
    return TaskSharingService(
        shared_task_repo,
        task_repo,
        user_repo,
        identity_service,
        session,
        audit_service,
    )


def get_visibility_service(
    sequence_repo: SequenceRepo,
    shot_repo: ShotRepo,
    task_repo: TaskRepo,
) -> VisibilityService:
    return VisibilityService(sequence_repo, shot_repo, task_repo)


ProjectStatusServiceDep = Annotated[ProjectStatusService, Depends(get_project_status_service)]
TaskSharingServiceDep = Annotated[TaskSharingService, Depends(get_task_sharing_service)]
VisibilityServiceDep = Annotated[VisibilityService, Depends(get_visibility_service)]
