"""API tests for project lifecycle endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.vfxflow.core.security import create_access_token
from src.vfxflow.models import User
from tests.helpers import auth_headers

pytestmark = pytest.mark.integration


async def _create(client: AsyncClient, user: User, **body) -> dict:
    response = await client.post(
        "/api/v1/projects",
        json={"title": "Car spot", **body},
        headers=auth_headers(user),
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _move(client: AsyncClient, user: User, project_id: str, to_status: str, **body):
    return await client.post(
        f"/api/v1/projects/{project_id}/status",
        json={"to_status": to_status, **body},
        headers=auth_headers(user),
    )


async def test_statuses_in_lifecycle_order(client, client_user):
    response = await client.get("/api/v1/statuses", headers=auth_headers(client_user))

    assert response.status_code == 200
    names = [s["name"] for s in response.json()]
    assert names == ["draft", "open", "in_progress", "review", "completed", "cancelled"]
    assert response.json()[0]["color"] == "#6b7280"


async def test_requires_bearer_token(client):
    response = await client.get("/api/v1/projects")

    assert response.status_code == 401
    assert "request_id" in response.json()


async def test_unknown_user_rejected(client):
    headers = {"Authorization": f"Bearer {create_access_token(uuid4())}"}

    response = await client.get("/api/v1/projects", headers=headers)

    assert response.status_code == 401


async def test_create_defaults_client_to_caller(client, client_user):
    project = await _create(client, client_user)

    assert project["status"] == "draft"
    assert project["status_color"] == "#6b7280"
    assert project["client_id"] == str(client_user.id)


async def test_create_for_another_client_requires_manager(client, client_user, artist, producer):
    denied = await client.post(
        "/api/v1/projects",
        json={"title": "Spot", "client_id": str(client_user.id)},
        headers=auth_headers(artist),
    )
    project = await _create(client, producer, client_id=str(client_user.id))

    assert denied.status_code == 403
    assert project["client_id"] == str(client_user.id)


async def test_lifecycle_over_http(client, client_user, producer, artist):
    project = await _create(client, client_user)
    project_id = project["id"]

    for user, target in [
        (producer, "open"),
        (producer, "in_progress"),
        (artist, "review"),
        (producer, "completed"),
    ]:
        response = await _move(client, user, project_id, target)
        assert response.status_code == 200, response.text
        assert response.json()["status"] == target

    history = await client.get(
        f"/api/v1/projects/{project_id}/history", headers=auth_headers(client_user)
    )

    body = history.json()
    assert history.status_code == 200
    assert [h["to_status"] for h in body["items"]] == [
        "completed",
        "review",
        "in_progress",
        "open",
        "draft",
    ]
    assert body["items"][-1]["from_status"] is None
    assert body["has_more"] is False


async def test_denied_transition_body(client, client_user, artist):
    project = await _create(client, client_user)

    response = await _move(client, artist, project["id"], "open")

    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "transition_denied"
    assert body["request_id"]
    assert response.headers["X-Request-ID"] == body["request_id"]


async def test_stale_expected_status_conflict(client, client_user, producer):
    project = await _create(client, client_user)
    await _move(client, producer, project["id"], "open")

    response = await _move(client, producer, project["id"], "cancelled", expected_status="draft")

    assert response.status_code == 409
    assert response.json()["code"] == "concurrent_modification"


async def test_unknown_project_is_404(client, producer):
    response = await _move(client, producer, str(uuid4()), "open")

    assert response.status_code == 404
    assert response.json()["code"] == "project_not_found"


async def test_available_transitions(client, client_user, producer, artist):
    project = await _create(client, client_user)
    url = f"/api/v1/projects/{project['id']}/transitions"

    as_producer = await client.get(url, headers=auth_headers(producer))
    as_artist = await client.get(url, headers=auth_headers(artist))

    assert as_producer.json()["current_status"] == "draft"
    assert {t["to_status"] for t in as_producer.json()["transitions"]} == {"open", "cancelled"}
    assert as_artist.json()["transitions"] == []


async def test_list_filters_by_status(client, client_user, producer):
    first = await _create(client, client_user)
    await _create(client, client_user)
    await _move(client, producer, first["id"], "open")

    response = await client.get(
        "/api/v1/projects", params={"status": "open"}, headers=auth_headers(client_user)
    )

    assert [p["id"] for p in response.json()["items"]] == [first["id"]]


async def test_get_project(client, client_user):
    project = await _create(client, client_user, description="30s spot")

    response = await client.get(
        f"/api/v1/projects/{project['id']}", headers=auth_headers(client_user)
    )

    assert response.status_code == 200
    assert response.json()["description"] == "30s spot"
