"""Project lifecycle service: creation, status changes and history."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.vfxflow.core.errors import (
    ConcurrentModification,
    ProjectNotFound,
    TransitionDenied,
    WorkflowError,
)
from src.vfxflow.core.logging import get_logger
from src.vfxflow.core.notifications import send_status_change_email
from src.vfxflow.models import (
    AuditAction,
    Project,
    ProjectStatus,
    ProjectStatusHistory,
)
from src.vfxflow.models.base import utc_now, utc_now_after
from src.vfxflow.repositories import (
    ProjectRepository,
    StatusHistoryRepository,
    UserRepository,
)
from src.vfxflow.services.audit_service import AuditService
from src.vfxflow.workflow import (
    Transition,
    get_available_transitions,
    get_transition,
    status_color,
    validate_transition,
)

logger = get_logger(__name__)


class ProjectStatusService:
    """The only writer of ``Project.status`` and of the status history.

    Every status change is a single read-validate-write unit: the project
    row is updated with a compare-and-swap on its current status and the
    history entry is appended in the same transaction.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        history_repo: StatusHistoryRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        audit_service: AuditService | None = None,
    ):
        self.project_repo = project_repo
        self.history_repo = history_repo
        self.user_repo = user_repo
        self.session = session
        self.audit_service = audit_service

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id, fresh=True)
        if project is None:
            raise ProjectNotFound(project_id)
        return project

    async def create_project(
        self,
        title: str,
        client_id: UUID,
        description: str | None = None,
        assigned_to: UUID | None = None,
        created_by: UUID | None = None,
    ) -> Project:
        """Create a project in ``draft`` together with its creation history entry."""
        try:
            now = utc_now()
            project = Project(
                title=title,
                description=description,
                client_id=client_id,
                assigned_to=assigned_to,
                status=ProjectStatus.DRAFT.value,
                created_at=now,
                updated_at=now,
            )
            self.project_repo.add(project)
            await self.session.flush()

            self.history_repo.add(
                ProjectStatusHistory(
                    project_id=project.id,
                    from_status=None,
                    to_status=ProjectStatus.DRAFT.value,
                    changed_by=created_by,
                    created_at=now,
                )
            )
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create project", error=str(e))
            raise

        logger.info(
            "Project created",
            project_id=str(project.id),
            client_id=str(client_id),
            created_by=str(created_by) if created_by else None,
        )
        if self.audit_service:
            await self.audit_service.log_success(
                action=AuditAction.PROJECT_CREATE,
                entity_type="project",
                entity_id=project.id,
                user_id=created_by,
                changes={"title": title, "status": ProjectStatus.DRAFT.value},
            )
        return project

    async def available_transitions(
        self,
        project_id: UUID,
        user_id: UUID,
        user_roles: Iterable[str],
    ) -> tuple[Project, list[Transition]]:
        """The project and the transitions this user may choose from right now."""
        project = await self.get_project(project_id)
        transitions = get_available_transitions(
            project.status, user_roles, is_owner=project.client_id == user_id
        )
        return project, transitions

    async def change_status(
        self,
        project_id: UUID,
        to_status: str,
        acting_user_id: UUID | None,
        acting_roles: Iterable[str],
        reason: str | None = None,
        expected_status: str | None = None,
    ) -> Project:
        """Move a project to ``to_status``.

        Args:
            project_id: Project to change
            to_status: Target status
            acting_user_id: Who is asking, None for system changes
            acting_roles: Every role the actor holds
            reason: Optional free text stored on the history entry
            expected_status: The status the caller last saw. When given and
                stale, the change is refused before validation.

        Returns:
            The project as persisted after the change

        Raises:
            ProjectNotFound: No such project
            ConcurrentModification: The stored status is not the one the
                caller saw, or it changed between read and write
            TransitionDenied: The transition is not in the catalog or the
                actor may not execute it
        """
        roles = frozenset(acting_roles)
        try:
            project = await self.get_project(project_id)
            from_status = project.status

            if expected_status is not None and expected_status != from_status:
                raise ConcurrentModification("project", project_id, expected_status)

            if not validate_transition(project, from_status, to_status, acting_user_id, roles):
                await self._audit_denied(project_id, from_status, to_status, acting_user_id)
                raise TransitionDenied(from_status, to_status)

            latest = await self.history_repo.get_latest(project_id)
            changed_at = utc_now_after(latest.created_at) if latest else utc_now()

            swapped = await self.project_repo.compare_and_set_status(
                project_id, from_status, to_status, updated_at=changed_at
            )
            if not swapped:
                raise ConcurrentModification("project", project_id, from_status)

            self.history_repo.add(
                ProjectStatusHistory(
                    project_id=project_id,
                    from_status=from_status,
                    to_status=to_status,
                    changed_by=acting_user_id,
                    reason=reason,
                    created_at=changed_at,
                )
            )
            await self.session.commit()

        except WorkflowError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to change project status",
                project_id=str(project_id),
                to_status=to_status,
                error=str(e),
            )
            raise

        logger.info(
            "Project status changed",
            project_id=str(project_id),
            from_status=from_status,
            to_status=to_status,
            changed_by=str(acting_user_id) if acting_user_id else None,
            reason=reason,
        )
        if self.audit_service:
            await self.audit_service.log_success(
                action=AuditAction.PROJECT_STATUS_CHANGE,
                entity_type="project",
                entity_id=project_id,
                user_id=acting_user_id,
                changes={"status": {"from": from_status, "to": to_status}, "reason": reason},
            )

        project = await self.get_project(project_id)

        transition = get_transition(from_status, to_status)
        if transition is not None and transition.auto_notification:
            await self._notify_watchers(project, from_status, acting_user_id, reason)

        return project

    async def list_history(self, project_id: UUID) -> list[ProjectStatusHistory]:
        """Every status change of a project, newest first."""
        return await self.history_repo.list_by_project(project_id)

    async def list_history_page(
        self,
        project_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ProjectStatusHistory], str | None, bool]:
        await self.get_project(project_id)
        return await self.history_repo.list_by_project_paginated(project_id, cursor, limit)

    async def _audit_denied(
        self,
        project_id: UUID,
        from_status: str,
        to_status: str,
        acting_user_id: UUID | None,
    ) -> None:
        logger.info(
            "Project status change denied",
            project_id=str(project_id),
            from_status=from_status,
            to_status=to_status,
        )
        if self.audit_service:
            await self.audit_service.log_failure(
                action=AuditAction.PROJECT_STATUS_CHANGE,
                entity_type="project",
                entity_id=project_id,
                user_id=acting_user_id,
                error_message="transition_denied",
                changes={"status": {"from": from_status, "to": to_status}},
            )

    async def _notify_watchers(
        self,
        project: Project,
        from_status: str,
        acting_user_id: UUID | None,
        reason: str | None,
    ) -> None:
        """Email the client and the assignee, never the actor.

        The status change is already committed, so nothing here may raise.
        """
        watcher_ids = {project.client_id, project.assigned_to} - {None, acting_user_id}
        if not watcher_ids:
            return
        try:
            watchers = await self.user_repo.get_many([w for w in watcher_ids if w is not None])
        except Exception as e:
            logger.warning(
                "Could not load project watchers", project_id=str(project.id), error=str(e)
            )
            return

        for watcher in watchers:
            if not watcher.is_active:
                continue
            send_status_change_email(
                to=watcher.email,
                recipient_name=watcher.full_name,
                project_title=project.title,
                project_id=str(project.id),
                from_status=from_status,
                to_status=project.status,
                from_color=status_color(from_status),
                to_color=status_color(project.status),
                reason=reason,
            )
