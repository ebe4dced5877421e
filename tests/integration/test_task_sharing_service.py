"""Integration tests for TaskSharingService."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from src.vfxflow.core.errors import (
    AlreadyShared,
    ArtistNotFound,
    GrantDecisionDenied,
    GrantNotFound,
    GrantUpdateDenied,
    InvalidArgument,
    NotPending,
    TaskNotFound,
)
from src.vfxflow.models import AppRole, AuditAction, GrantStatus
from src.vfxflow.repositories import SharedTaskRepository
from tests.factories import ProjectFactory, SharedTaskFactory, UserFactory
from tests.helpers import create_breakdown, create_user_with_roles

pytestmark = pytest.mark.integration

STUDIO = [AppRole.STUDIO.value]
ARTIST = [AppRole.ARTIST.value]

SHARED_EMAIL = "src.vfxflow.services.task_sharing_service.send_task_shared_email"
DECISION_EMAIL = "src.vfxflow.services.task_sharing_service.send_grant_decision_email"


@pytest.fixture(autouse=True)
def _no_email():
    with patch(SHARED_EMAIL) as shared, patch(DECISION_EMAIL) as decision:
        yield shared, decision


@pytest.fixture
async def breakdown(db_session, client_user):
    project = ProjectFactory.build(client_id=client_user.id)
    db_session.add(project)
    await db_session.commit()
    return await create_breakdown(db_session, project.id, name="comp_main")


@pytest.fixture
async def pending_grant(task_sharing_service, breakdown, studio, artist):
    return await task_sharing_service.share_task(
        breakdown.task.id, artist.id, "edit", "Comp only", granted_by=studio.id
    )


class TestResolveArtist:
    async def test_handle_matches_case_insensitively(self, task_sharing_service, artist):
        assert await task_sharing_service.resolve_artist_by_handle(" artist@EXAMPLE.com ") == (
            artist.id
        )

    async def test_unknown_handle(self, task_sharing_service):
        with pytest.raises(ArtistNotFound) as exc_info:
            await task_sharing_service.resolve_artist_by_handle("ghost@example.com")

        assert exc_info.value.handle == "ghost@example.com"

    async def test_user_without_artist_role(self, task_sharing_service, studio):
        with pytest.raises(ArtistNotFound):
            await task_sharing_service.resolve_artist_by_handle("studio@example.com")

    async def test_inactive_artist(self, db_session, task_sharing_service):
        await create_user_with_roles(
            db_session, AppRole.ARTIST, email="gone@example.com", is_active=False
        )

        with pytest.raises(ArtistNotFound):
            await task_sharing_service.resolve_artist_by_handle("gone@example.com")


class TestShareTask:
    async def test_grant_starts_pending(self, pending_grant, breakdown, studio, artist):
        assert pending_grant.status == GrantStatus.PENDING.value
        assert pending_grant.task_id == breakdown.task.id
        assert pending_grant.studio_id == studio.id
        assert pending_grant.artist_id == artist.id
        assert pending_grant.access_level == "edit"
        assert pending_grant.approved_at is None

    async def test_artist_is_notified(self, pending_grant, _no_email):
        shared, _ = _no_email

        shared.assert_called_once()
        kwargs = shared.call_args.kwargs
        assert kwargs["to"] == "Artist@Example.com"
        assert kwargs["task_name"] == "comp_main"
        assert kwargs["grant_id"] == str(pending_grant.id)

    async def test_share_is_audited(self, pending_grant, mock_audit_service):
        kwargs = mock_audit_service.log_success.call_args.kwargs
        assert kwargs["action"] == AuditAction.TASK_SHARE
        assert kwargs["entity_id"] == pending_grant.id

    async def test_duplicate_pending_share_rejected(
        self, db_session, task_sharing_service, pending_grant, breakdown, studio, artist
    ):
        task_id, artist_id, studio_id = breakdown.task.id, artist.id, studio.id

        with pytest.raises(AlreadyShared):
            await task_sharing_service.share_task(task_id, artist_id, "view", None, studio_id)

        grants = await SharedTaskRepository(db_session).list_by_artist(artist_id)
        assert len(grants) == 1

    async def test_unknown_task(self, task_sharing_service, studio, artist):
        with pytest.raises(TaskNotFound):
            await task_sharing_service.share_task(uuid4(), artist.id, "view", None, studio.id)

    async def test_unique_index_catches_lost_race(
        self, db_session, task_sharing_service, breakdown, studio, artist, monkeypatch
    ):
        task_id, artist_id, studio_id = breakdown.task.id, artist.id, studio.id
        db_session.add(
            SharedTaskFactory.build(task_id=task_id, studio_id=studio_id, artist_id=artist_id)
        )
        await db_session.commit()
        monkeypatch.setattr(
            task_sharing_service.shared_task_repo,
            "get_active_for_pair",
            AsyncMock(return_value=None),
        )

        with pytest.raises(AlreadyShared):
            await task_sharing_service.share_task(task_id, artist_id, "view", None, studio_id)

    async def test_reshare_allowed_after_reject(
        self, task_sharing_service, pending_grant, breakdown, studio, artist
    ):
        task_id, artist_id, studio_id = breakdown.task.id, artist.id, studio.id
        await task_sharing_service.resolve_grant(pending_grant.id, "reject", artist_id, ARTIST)

        again = await task_sharing_service.share_task(task_id, artist_id, "view", None, studio_id)

        assert again.status == GrantStatus.PENDING.value
        assert again.id != pending_grant.id

    async def test_approved_grant_blocks_new_share(
        self, db_session, task_sharing_service, pending_grant, breakdown, studio, artist
    ):
        task_id, artist_id, studio_id = breakdown.task.id, artist.id, studio.id
        await task_sharing_service.resolve_grant(pending_grant.id, "approve", artist_id, ARTIST)

        with pytest.raises(AlreadyShared):
            await task_sharing_service.share_task(task_id, artist_id, "edit", None, studio_id)

        grants = await SharedTaskRepository(db_session).list_by_artist(artist_id)
        assert [g.status for g in grants] == [GrantStatus.APPROVED.value]

    async def test_grantee_without_artist_role_rejected(
        self, db_session, task_sharing_service, breakdown, studio, producer
    ):
        task_id, producer_id, studio_id = breakdown.task.id, producer.id, studio.id

        with pytest.raises(ArtistNotFound):
            await task_sharing_service.share_task(task_id, producer_id, "edit", None, studio_id)

        assert await SharedTaskRepository(db_session).list_by_artist(producer_id) == []

    async def test_unknown_grantee_rejected(self, task_sharing_service, breakdown, studio):
        with pytest.raises(ArtistNotFound):
            await task_sharing_service.share_task(
                breakdown.task.id, uuid4(), "view", None, studio.id
            )

    async def test_inactive_grantee_rejected(
        self, db_session, task_sharing_service, breakdown, studio
    ):
        task_id, studio_id = breakdown.task.id, studio.id
        retired = await create_user_with_roles(db_session, AppRole.ARTIST, is_active=False)

        with pytest.raises(ArtistNotFound):
            await task_sharing_service.share_task(task_id, retired.id, "view", None, studio_id)

    async def test_unknown_access_level(self, task_sharing_service, breakdown, studio, artist):
        with pytest.raises(InvalidArgument):
            await task_sharing_service.share_task(
                breakdown.task.id, artist.id, "owner", None, studio.id
            )


class TestResolveGrant:
    async def test_artist_approves(self, task_sharing_service, pending_grant, artist, _no_email):
        grant = await task_sharing_service.resolve_grant(
            pending_grant.id, "approve", artist.id, ARTIST
        )

        assert grant.status == GrantStatus.APPROVED.value
        assert grant.approved_by == artist.id
        assert grant.approved_at is not None
        _, decision = _no_email
        assert decision.call_args.kwargs["decision"] == "approved"
        assert decision.call_args.kwargs["to"] == "studio@example.com"

    async def test_artist_rejects(self, task_sharing_service, pending_grant, artist):
        grant = await task_sharing_service.resolve_grant(
            pending_grant.id, "reject", artist.id, ARTIST
        )

        assert grant.status == GrantStatus.REJECTED.value
        assert grant.approved_at is None
        assert grant.approved_by is None

    async def test_issuing_studio_may_decide(self, task_sharing_service, pending_grant, studio):
        grant = await task_sharing_service.resolve_grant(
            pending_grant.id, "approve", studio.id, STUDIO
        )

        assert grant.status == GrantStatus.APPROVED.value

    async def test_other_artist_may_not_decide(
        self, db_session, task_sharing_service, pending_grant
    ):
        grant_id = pending_grant.id
        outsider = await create_user_with_roles(db_session, AppRole.ARTIST)
        outsider_id = outsider.id

        with pytest.raises(GrantDecisionDenied):
            await task_sharing_service.resolve_grant(grant_id, "approve", outsider_id, ARTIST)

        assert (await task_sharing_service.get_grant(grant_id)).status == "pending"

    async def test_second_decision_rejected(self, task_sharing_service, pending_grant, artist):
        grant_id, artist_id = pending_grant.id, artist.id
        await task_sharing_service.resolve_grant(grant_id, "approve", artist_id, ARTIST)

        with pytest.raises(NotPending) as exc_info:
            await task_sharing_service.resolve_grant(grant_id, "reject", artist_id, ARTIST)

        assert exc_info.value.status == "approved"
        assert (await task_sharing_service.get_grant(grant_id)).status == "approved"

    async def test_lost_race_raises_not_pending(
        self, task_sharing_service, pending_grant, artist, monkeypatch
    ):
        grant_id, artist_id = pending_grant.id, artist.id
        monkeypatch.setattr(
            task_sharing_service.shared_task_repo,
            "resolve_pending",
            AsyncMock(return_value=False),
        )

        with pytest.raises(NotPending):
            await task_sharing_service.resolve_grant(grant_id, "approve", artist_id, ARTIST)

    async def test_unknown_grant(self, task_sharing_service, artist):
        with pytest.raises(GrantNotFound):
            await task_sharing_service.resolve_grant(uuid4(), "approve", artist.id, ARTIST)

    async def test_rejection_is_final(self, task_sharing_service, pending_grant, artist):
        grant_id, artist_id = pending_grant.id, artist.id
        await task_sharing_service.resolve_grant(grant_id, "reject", artist_id, ARTIST)

        with pytest.raises(NotPending) as exc_info:
            await task_sharing_service.resolve_grant(grant_id, "approve", artist_id, ARTIST)

        assert exc_info.value.status == "rejected"
        assert (await task_sharing_service.get_grant(grant_id)).status == "rejected"

    async def test_unrelated_studio_may_not_decide(
        self, db_session, task_sharing_service, pending_grant
    ):
        grant_id = pending_grant.id
        rival = await create_user_with_roles(db_session, AppRole.STUDIO)
        rival_id = rival.id

        with pytest.raises(GrantDecisionDenied):
            await task_sharing_service.resolve_grant(grant_id, "approve", rival_id, STUDIO)

        assert (await task_sharing_service.get_grant(grant_id)).status == "pending"

    async def test_admin_may_decide(self, task_sharing_service, pending_grant, admin):
        grant = await task_sharing_service.resolve_grant(
            pending_grant.id, "reject", admin.id, [AppRole.ADMIN.value]
        )

        assert grant.status == GrantStatus.REJECTED.value

    async def test_unknown_decision(self, task_sharing_service, pending_grant, artist):
        with pytest.raises(InvalidArgument):
            await task_sharing_service.resolve_grant(pending_grant.id, "maybe", artist.id, ARTIST)


class TestUpdatePendingGrant:
    async def test_amend_access_and_notes(self, task_sharing_service, pending_grant, studio):
        grant = await task_sharing_service.update_pending_grant(
            pending_grant.id, studio.id, STUDIO, access_level="comment", notes="Notes only"
        )

        assert grant.access_level == "comment"
        assert grant.notes == "Notes only"
        assert grant.status == GrantStatus.PENDING.value

    async def test_admin_may_amend(self, task_sharing_service, pending_grant, admin):
        grant = await task_sharing_service.update_pending_grant(
            pending_grant.id, admin.id, [AppRole.ADMIN.value], access_level="view"
        )

        assert grant.access_level == "view"

    async def test_unrelated_studio_may_not_amend(
        self, db_session, task_sharing_service, pending_grant
    ):
        grant_id = pending_grant.id
        rival = await create_user_with_roles(db_session, AppRole.STUDIO)
        rival_id = rival.id

        with pytest.raises(GrantUpdateDenied):
            await task_sharing_service.update_pending_grant(
                grant_id, rival_id, STUDIO, access_level="view"
            )

        assert (await task_sharing_service.get_grant(grant_id)).access_level == "edit"

    async def test_resolved_grant_is_frozen(
        self, task_sharing_service, pending_grant, studio, artist
    ):
        grant_id, studio_id = pending_grant.id, studio.id
        await task_sharing_service.resolve_grant(grant_id, "approve", artist.id, ARTIST)

        with pytest.raises(NotPending):
            await task_sharing_service.update_pending_grant(
                grant_id, studio_id, STUDIO, access_level="view"
            )

        assert (await task_sharing_service.get_grant(grant_id)).access_level == "edit"

    async def test_unknown_access_level(self, task_sharing_service, pending_grant, studio):
        with pytest.raises(InvalidArgument) as exc_info:
            await task_sharing_service.update_pending_grant(
                pending_grant.id, studio.id, STUDIO, access_level="owner"
            )

        assert exc_info.value.field == "access_level"


class TestListGrants:
    async def test_lists_by_party_and_status(
        self, db_session, task_sharing_service, pending_grant, breakdown, studio, artist
    ):
        other = UserFactory.build()
        db_session.add(other)
        await db_session.commit()

        for_artist = await task_sharing_service.list_grants_for_artist(artist.id)
        approved = await task_sharing_service.list_grants_for_artist(artist.id, "approved")
        for_studio = await task_sharing_service.list_grants_for_studio(studio.id, "pending")
        for_other = await task_sharing_service.list_grants_for_studio(other.id)

        assert [g.id for g in for_artist] == [pending_grant.id]
        assert approved == []
        assert [g.id for g in for_studio] == [pending_grant.id]
        assert for_other == []
