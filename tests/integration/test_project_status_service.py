"""Integration tests for ProjectStatusService."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from src.vfxflow.core.errors import ConcurrentModification, ProjectNotFound, TransitionDenied
from src.vfxflow.models import AppRole, AuditAction, ProjectStatus
from src.vfxflow.repositories import ProjectRepository, StatusHistoryRepository

pytestmark = pytest.mark.integration

PRODUCER = [AppRole.PRODUCER.value]
ARTIST = [AppRole.ARTIST.value]

NOTIFY = "src.vfxflow.services.project_status_service.send_status_change_email"


@pytest.fixture
async def project(project_status_service, client_user, producer):
    return await project_status_service.create_project(
        title="Car spot", client_id=client_user.id, created_by=producer.id
    )


async def _history(db_session, project_id):
    return await StatusHistoryRepository(db_session).list_by_project(project_id)


class TestCreateProject:
    async def test_starts_in_draft_with_creation_entry(self, db_session, project, producer):
        history = await _history(db_session, project.id)

        assert project.status == ProjectStatus.DRAFT.value
        assert len(history) == 1
        assert history[0].from_status is None
        assert history[0].to_status == "draft"
        assert history[0].changed_by == producer.id
        assert history[0].created_at == project.created_at

    async def test_creation_is_audited(self, project, mock_audit_service):
        mock_audit_service.log_success.assert_awaited_once()
        kwargs = mock_audit_service.log_success.call_args.kwargs
        assert kwargs["action"] == AuditAction.PROJECT_CREATE
        assert kwargs["entity_id"] == project.id


class TestChangeStatus:
    async def test_full_lifecycle_records_every_step(
        self, db_session, project_status_service, project, producer, artist
    ):
        project_id = project.id
        with patch(NOTIFY):
            await project_status_service.change_status(project_id, "open", producer.id, PRODUCER)
            await project_status_service.change_status(
                project_id, "in_progress", producer.id, PRODUCER
            )
            await project_status_service.change_status(
                project_id, "review", artist.id, ARTIST, reason="v3 delivered"
            )
            final = await project_status_service.change_status(
                project_id, "completed", producer.id, PRODUCER
            )

        history = await _history(db_session, project_id)

        assert final.status == "completed"
        assert [(h.from_status, h.to_status) for h in history] == [
            ("review", "completed"),
            ("in_progress", "review"),
            ("open", "in_progress"),
            ("draft", "open"),
            (None, "draft"),
        ]
        assert history[1].reason == "v3 delivered"
        assert history[1].changed_by == artist.id
        timestamps = [h.created_at for h in reversed(history)]
        assert timestamps == sorted(set(timestamps))

    async def test_latest_history_entry_matches_project(
        self, db_session, project_status_service, project, producer
    ):
        project_id = project.id
        with patch(NOTIFY):
            await project_status_service.change_status(project_id, "open", producer.id, PRODUCER)
            await project_status_service.change_status(
                project_id, "cancelled", producer.id, PRODUCER
            )

        stored = await ProjectRepository(db_session).get_by_id(project_id, fresh=True)
        latest = await StatusHistoryRepository(db_session).get_latest(project_id)

        assert latest.to_status == stored.status == "cancelled"
        assert stored.updated_at == latest.created_at

    async def test_denied_transition_leaves_no_trace(
        self, db_session, project_status_service, project, artist, mock_audit_service
    ):
        project_id = project.id
        artist_id = artist.id

        with pytest.raises(TransitionDenied) as exc_info:
            await project_status_service.change_status(project_id, "open", artist_id, ARTIST)

        assert exc_info.value.from_status == "draft"
        stored = await ProjectRepository(db_session).get_by_id(project_id, fresh=True)
        assert stored.status == "draft"
        assert len(await _history(db_session, project_id)) == 1
        mock_audit_service.log_failure.assert_awaited_once()
        assert mock_audit_service.log_failure.call_args.kwargs["error_message"] == (
            "transition_denied"
        )

    @pytest.mark.parametrize("target", ["completed", "archived", "draft"])
    async def test_transition_outside_catalog_denied(
        self, project_status_service, project, producer, target
    ):
        with pytest.raises(TransitionDenied):
            await project_status_service.change_status(project.id, target, producer.id, PRODUCER)

    async def test_terminal_status_has_no_exit(
        self, project_status_service, project, producer
    ):
        project_id = project.id
        producer_id = producer.id
        with patch(NOTIFY):
            await project_status_service.change_status(
                project_id, "cancelled", producer_id, PRODUCER
            )

        with pytest.raises(TransitionDenied):
            await project_status_service.change_status(project_id, "open", producer_id, PRODUCER)

    async def test_owner_may_cancel_without_a_role(
        self, project_status_service, project, client_user, producer
    ):
        with patch(NOTIFY):
            await project_status_service.change_status(project.id, "open", producer.id, PRODUCER)
            cancelled = await project_status_service.change_status(
                project.id, "cancelled", client_user.id, []
            )

        assert cancelled.status == "cancelled"

    async def test_stale_expected_status_rejected(
        self, db_session, project_status_service, project, producer
    ):
        project_id = project.id

        with pytest.raises(ConcurrentModification) as exc_info:
            await project_status_service.change_status(
                project_id, "open", producer.id, PRODUCER, expected_status="open"
            )

        assert exc_info.value.expected == "open"
        assert len(await _history(db_session, project_id)) == 1

    async def test_lost_compare_and_swap_rolls_back(
        self, db_session, project_status_service, project, producer, monkeypatch
    ):
        project_id = project.id
        producer_id = producer.id
        monkeypatch.setattr(
            project_status_service.project_repo,
            "compare_and_set_status",
            AsyncMock(return_value=False),
        )

        with pytest.raises(ConcurrentModification):
            await project_status_service.change_status(project_id, "open", producer_id, PRODUCER)

        assert len(await _history(db_session, project_id)) == 1

    async def test_compare_and_swap_refuses_stale_expectation(self, db_session, project):
        repo = ProjectRepository(db_session)

        assert await repo.compare_and_set_status(project.id, "open", "in_progress") is False
        assert await repo.compare_and_set_status(project.id, "draft", "open") is True

    async def test_unknown_project(self, project_status_service, producer):
        with pytest.raises(ProjectNotFound):
            await project_status_service.change_status(uuid4(), "open", producer.id, PRODUCER)

    async def test_success_is_audited(
        self, project_status_service, project, producer, mock_audit_service
    ):
        with patch(NOTIFY):
            await project_status_service.change_status(project.id, "open", producer.id, PRODUCER)

        kwargs = mock_audit_service.log_success.call_args.kwargs
        assert kwargs["action"] == AuditAction.PROJECT_STATUS_CHANGE
        assert kwargs["changes"]["status"] == {"from": "draft", "to": "open"}


class TestWatcherNotifications:
    async def test_client_and_assignee_notified(
        self, db_session, project_status_service, client_user, producer, artist
    ):
        project = await project_status_service.create_project(
            title="Trailer", client_id=client_user.id, assigned_to=artist.id
        )

        with patch(NOTIFY) as mock_notify:
            await project_status_service.change_status(
                project.id, "open", producer.id, PRODUCER, reason="Kickoff"
            )

        recipients = {c.kwargs["to"] for c in mock_notify.call_args_list}
        assert recipients == {"client@example.com", "Artist@Example.com"}
        call = mock_notify.call_args_list[0].kwargs
        assert call["from_status"] == "draft"
        assert call["to_status"] == "open"
        assert call["to_color"] == "#3b82f6"
        assert call["reason"] == "Kickoff"

    async def test_actor_is_not_notified(self, project_status_service, project, client_user):
        with patch(NOTIFY) as mock_notify:
            await project_status_service.change_status(project.id, "cancelled", client_user.id, [])

        mock_notify.assert_not_called()


class TestQueries:
    async def test_available_transitions_for_manager(
        self, project_status_service, project, producer
    ):
        _, transitions = await project_status_service.available_transitions(
            project.id, producer.id, PRODUCER
        )

        assert {t.to_status for t in transitions} == {"open", "cancelled"}

    async def test_available_transitions_empty_without_role(
        self, project_status_service, project, artist
    ):
        _, transitions = await project_status_service.available_transitions(
            project.id, artist.id, ARTIST
        )

        assert transitions == []

    async def test_owner_sees_every_exit(self, project_status_service, project, client_user):
        _, transitions = await project_status_service.available_transitions(
            project.id, client_user.id, []
        )

        assert {t.to_status for t in transitions} == {"open", "cancelled"}

    async def test_history_page(self, project_status_service, project, producer):
        with patch(NOTIFY):
            await project_status_service.change_status(project.id, "open", producer.id, PRODUCER)
            await project_status_service.change_status(
                project.id, "in_progress", producer.id, PRODUCER
            )

        first, cursor, has_more = await project_status_service.list_history_page(
            project.id, limit=2
        )
        rest, _, more_after = await project_status_service.list_history_page(
            project.id, cursor=cursor, limit=2
        )

        assert [h.to_status for h in first] == ["in_progress", "open"]
        assert has_more is True
        assert [h.to_status for h in rest] == ["draft"]
        assert more_after is False

    async def test_history_page_unknown_project(self, project_status_service):
        with pytest.raises(ProjectNotFound):
            await project_status_service.list_history_page(uuid4())

    async def test_history_of_unknown_project_is_empty(self, project_status_service):
        assert await project_status_service.list_history(uuid4()) == []
