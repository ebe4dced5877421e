"""Task sharing: grants from a studio to an artist, and the artist's decision."""

from collections.abc import Iterable
from enum import Enum
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.vfxflow.core.errors import (
    AlreadyShared,
    ArtistNotFound,
    GrantDecisionDenied,
    GrantNotFound,
    GrantUpdateDenied,
    InvalidArgument,
    NotPending,
    TaskNotFound,
    WorkflowError,
)
from src.vfxflow.core.logging import get_logger
from src.vfxflow.core.notifications import send_grant_decision_email, send_task_shared_email
from src.vfxflow.models import (
    AccessLevel,
    AppRole,
    AuditAction,
    GrantDecision,
    GrantStatus,
    SharedTask,
)
from src.vfxflow.models.base import utc_now
from src.vfxflow.repositories import SharedTaskRepository, TaskRepository, UserRepository
from src.vfxflow.services.audit_service import AuditService
from src.vfxflow.services.identity_service import IdentityService, UserNotFound

logger = get_logger(__name__)


def _coerce[E: Enum](enum_type: type[E], field: str, value: E | str) -> E:
    try:
        return enum_type(value)
    except ValueError:
        raise InvalidArgument(field, value) from None


def _is_active_pair_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "uq_shared_tasks_active_pair" in message or "unique" in message


class TaskSharingService:
    """Creates, amends and resolves shared task grants.

    A grant starts ``pending`` and is resolved exactly once, to ``approved``
    or ``rejected``. Resolution is a conditional update on ``status =
    'pending'``, so racing decisions cannot both win.
    """

    def __init__(
        self,
        shared_task_repo: SharedTaskRepository,
        task_repo: TaskRepository,
        user_repo: UserRepository,
        identity_service: IdentityService,
        session: AsyncSession,
        audit_service: AuditService | None = None,
    ):
        self.shared_task_repo = shared_task_repo
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.identity_service = identity_service
        self.session = session
        self.audit_service = audit_service

    async def resolve_artist_by_handle(self, handle: str) -> UUID:
        """Resolve a contact handle to the id of an active artist.

        Raises:
            ArtistNotFound: Unknown handle, inactive user, or a user who
                does not hold the artist role
        """
        lookup = await self.identity_service.find_user_by_handle(handle)
        if isinstance(lookup, UserNotFound):
            raise ArtistNotFound(handle)
        if not lookup.is_active or AppRole.ARTIST.value not in lookup.roles:
            raise ArtistNotFound(handle)
        return lookup.id

    async def _require_artist(self, artist_id: UUID) -> None:
        """Same rule as handle lookup, for callers that pass an id directly."""
        user = await self.user_repo.get_by_id(artist_id)
        if user is None or not user.is_active:
            raise ArtistNotFound(str(artist_id))
        if AppRole.ARTIST.value not in await self.identity_service.get_roles(artist_id):
            raise ArtistNotFound(str(artist_id))

    async def get_grant(self, grant_id: UUID) -> SharedTask:
        grant = await self.shared_task_repo.get_by_id(grant_id, fresh=True)
        if grant is None:
            raise GrantNotFound(grant_id)
        return grant

    async def share_task(
        self,
        task_id: UUID,
        artist_id: UUID,
        access_level: AccessLevel | str,
        notes: str | None,
        granted_by: UUID,
    ) -> SharedTask:
        """Offer a task to an artist. The grant starts pending.

        Raises:
            TaskNotFound: No such task
            ArtistNotFound: The grantee is missing, inactive or not an artist
            AlreadyShared: A pending or approved grant already exists for
                this task and artist
        """
        level = _coerce(AccessLevel, "access_level", access_level).value
        try:
            task = await self.task_repo.get_by_id(task_id)
            if task is None:
                raise TaskNotFound(task_id)

            await self._require_artist(artist_id)

            if await self.shared_task_repo.get_active_for_pair(task_id, artist_id):
                raise AlreadyShared(task_id, artist_id)

            grant = SharedTask(
                task_id=task_id,
                studio_id=granted_by,
                artist_id=artist_id,
                access_level=level,
                notes=notes,
                status=GrantStatus.PENDING.value,
                shared_at=utc_now(),
            )
            self.shared_task_repo.add(grant)
            await self.session.commit()

        except IntegrityError as e:
            await self.session.rollback()
            if _is_active_pair_violation(e):
                # Lost the race against a concurrent share of the same pair
                raise AlreadyShared(task_id, artist_id) from None
            logger.error("Failed to share task", task_id=str(task_id), error=str(e))
            raise
        except WorkflowError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to share task", task_id=str(task_id), error=str(e))
            raise

        logger.info(
            "Task shared",
            grant_id=str(grant.id),
            task_id=str(task_id),
            artist_id=str(artist_id),
            access_level=level,
            granted_by=str(granted_by),
        )
        if self.audit_service:
            await self.audit_service.log_success(
                action=AuditAction.TASK_SHARE,
                entity_type="shared_task",
                entity_id=grant.id,
                user_id=granted_by,
                changes={"task_id": str(task_id), "artist_id": str(artist_id), "access_level": level},
            )

        await self._notify_artist(grant, task.name)
        return grant

    async def update_pending_grant(
        self,
        grant_id: UUID,
        updated_by: UUID,
        updater_roles: Iterable[str],
        access_level: AccessLevel | str | None = None,
        notes: str | None = None,
    ) -> SharedTask:
        """Change the access level or notes of a grant the artist has not answered yet.

        Only the studio that issued the grant, or an admin, may amend it.

        Raises:
            GrantNotFound: No such grant
            GrantUpdateDenied: The caller neither issued the grant nor is an admin
            NotPending: The grant was already approved or rejected
        """
        level = (
            _coerce(AccessLevel, "access_level", access_level).value
            if access_level is not None
            else None
        )
        try:
            grant = await self.get_grant(grant_id)
            if grant.studio_id != updated_by and AppRole.ADMIN.value not in updater_roles:
                raise GrantUpdateDenied(grant_id)
            if grant.status != GrantStatus.PENDING.value:
                raise NotPending(grant_id, grant.status)

            updated = await self.shared_task_repo.update_pending(grant_id, level, notes)
            if not updated:
                current = await self.get_grant(grant_id)
                raise NotPending(grant_id, current.status)
            await self.session.commit()

        except WorkflowError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to update grant", grant_id=str(grant_id), error=str(e))
            raise

        logger.info("Pending grant updated", grant_id=str(grant_id), access_level=level)
        if self.audit_service:
            await self.audit_service.log_success(
                action=AuditAction.GRANT_UPDATE,
                entity_type="shared_task",
                entity_id=grant_id,
                user_id=updated_by,
                changes={"access_level": level, "notes": notes},
            )
        return await self.get_grant(grant_id)

    async def resolve_grant(
        self,
        grant_id: UUID,
        decision: GrantDecision | str,
        decided_by: UUID,
        decider_roles: Iterable[str],
    ) -> SharedTask:
        """Approve or reject a pending grant.

        The grant's artist may decide, as may the studio that issued it or
        an admin.

        Raises:
            GrantNotFound: No such grant
            GrantDecisionDenied: The decider may not answer this grant
            NotPending: The grant was already resolved
        """
        decision = _coerce(GrantDecision, "decision", decision)
        new_status = (
            GrantStatus.APPROVED if decision == GrantDecision.APPROVE else GrantStatus.REJECTED
        )
        try:
            grant = await self.get_grant(grant_id)

            parties = {grant.artist_id, grant.studio_id}
            if decided_by not in parties and AppRole.ADMIN.value not in decider_roles:
                raise GrantDecisionDenied(grant_id)

            if grant.status != GrantStatus.PENDING.value:
                raise NotPending(grant_id, grant.status)

            resolved = await self.shared_task_repo.resolve_pending(
                grant_id, new_status, decided_by=decided_by, decided_at=utc_now()
            )
            if not resolved:
                current = await self.get_grant(grant_id)
                raise NotPending(grant_id, current.status)
            await self.session.commit()

        except WorkflowError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to resolve grant", grant_id=str(grant_id), error=str(e))
            raise

        logger.info(
            "Grant resolved",
            grant_id=str(grant_id),
            status=new_status.value,
            decided_by=str(decided_by),
        )
        if self.audit_service:
            await self.audit_service.log_success(
                action=(
                    AuditAction.GRANT_APPROVE
                    if new_status == GrantStatus.APPROVED
                    else AuditAction.GRANT_REJECT
                ),
                entity_type="shared_task",
                entity_id=grant_id,
                user_id=decided_by,
            )

        grant = await self.get_grant(grant_id)
        await self._notify_grantor(grant)
        return grant

    async def list_grants_for_artist(
        self, artist_id: UUID, status: GrantStatus | str | None = None
    ) -> list[SharedTask]:
        return await self.shared_task_repo.list_by_artist(
            artist_id, _coerce(GrantStatus, "status", status).value if status else None
        )

    async def list_grants_for_studio(
        self, studio_id: UUID, status: GrantStatus | str | None = None
    ) -> list[SharedTask]:
        return await self.shared_task_repo.list_by_studio(
            studio_id, _coerce(GrantStatus, "status", status).value if status else None
        )

    async def _notify_artist(self, grant: SharedTask, task_name: str) -> None:
        try:
            artist = await self.user_repo.get_by_id(grant.artist_id)
            studio = await self.user_repo.get_by_id(grant.studio_id)
        except Exception as e:
            logger.warning("Could not load grant parties", grant_id=str(grant.id), error=str(e))
            return
        if artist is None:
            return
        send_task_shared_email(
            to=artist.email,
            artist_name=artist.full_name,
            studio_name=studio.full_name if studio else "A studio",
            task_name=task_name,
            access_level=grant.access_level,
            grant_id=str(grant.id),
        )

    async def _notify_grantor(self, grant: SharedTask) -> None:
        try:
            studio = await self.user_repo.get_by_id(grant.studio_id)
            artist = await self.user_repo.get_by_id(grant.artist_id)
            task = await self.task_repo.get_by_id(grant.task_id)
        except Exception as e:
            logger.warning("Could not load grant parties", grant_id=str(grant.id), error=str(e))
            return
        if studio is None:
            return
        send_grant_decision_email(
            to=studio.email,
            studio_name=studio.full_name,
            artist_name=artist.full_name if artist else "The artist",
            task_name=task.name if task else "a task",
            decision=grant.status,
        )
