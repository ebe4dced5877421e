"""Integration test fixtures: in-memory SQLite database and HTTP client.

Every test gets a fresh database. Uses polyfactory for test data.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.vfxflow import models  # noqa: F401 - registers tables on the metadata
from src.vfxflow.api.dependencies import get_audit_service, get_db_session
from src.vfxflow.core.db import get_session_factory
from src.vfxflow.core.health import reset_health_cache
from src.vfxflow.core.shutdown import request_tracker
from src.vfxflow.main import create_app
from src.vfxflow.models import AppRole, User
from src.vfxflow.repositories import (
    AuditLogRepository,
    ProjectRepository,
    SequenceRepository,
    SharedTaskRepository,
    ShotRepository,
    StatusHistoryRepository,
    TaskRepository,
    UserRepository,
)
from src.vfxflow.services import (
    AuditService,
    IdentityService,
    ProjectStatusService,
    TaskSharingService,
    VisibilityService,
)
from tests.helpers import create_user_with_roles

@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with every table created."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session used by both the test and the services under test.

    Tests must commit explicitly; services commit their own work.
    """
    async with get_session_factory(engine)() as session:
        yield session


# --- Actors ---


@pytest.fixture
async def client_user(db_session: AsyncSession) -> User:
    """Project owner with no platform role."""
    return await create_user_with_roles(db_session, full_name="Client", email="client@example.com")


@pytest.fixture
async def producer(db_session: AsyncSession) -> User:
    return await create_user_with_roles(
        db_session, AppRole.PRODUCER, full_name="Producer", email="producer@example.com"
    )


@pytest.fixture
async def studio(db_session: AsyncSession) -> User:
    return await create_user_with_roles(
        db_session, AppRole.STUDIO, full_name="Studio", email="studio@example.com"
    )


@pytest.fixture
async def artist(db_session: AsyncSession) -> User:
    return await create_user_with_roles(
        db_session, AppRole.ARTIST, full_name="Artist", email="Artist@Example.com"
    )


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    return await create_user_with_roles(
        db_session, AppRole.ADMIN, full_name="Admin", email="admin@example.com"
    )


# --- Services ---


@pytest.fixture
def mock_audit_service() -> AsyncMock:
    return AsyncMock(spec=AuditService)


@pytest.fixture
def project_status_service(
    db_session: AsyncSession, mock_audit_service: AsyncMock
) -> ProjectStatusService:
    return ProjectStatusService(
        ProjectRepository(db_session),
        StatusHistoryRepository(db_session),
        UserRepository(db_session),
        db_session,
        mock_audit_service,
    )


@pytest.fixture
def task_sharing_service(
    db_session: AsyncSession, mock_audit_service: AsyncMock
) -> TaskSharingService:
    user_repo = UserRepository(db_session)
    return TaskSharingService(
        SharedTaskRepository(db_session),
        TaskRepository(db_session),
        user_repo,
        IdentityService(user_repo),
        db_session,
        mock_audit_service,
    )


@pytest.fixture
def visibility_service(db_session: AsyncSession) -> VisibilityService:
    return VisibilityService(
        SequenceRepository(db_session),
        ShotRepository(db_session),
        TaskRepository(db_session),
    )


# --- HTTP ---


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app, wired to the test database."""
    factory = get_session_factory(engine)

    async def _db_session() -> AsyncGenerator[AsyncSession]:
        async with factory() as session:
            yield session

    async def _audit_service() -> AsyncGenerator[AuditService]:
        async with factory() as session:
            yield AuditService(AuditLogRepository(session), session)

    reset_health_cache()
    request_tracker.reset()
    app = create_app()
    app.dependency_overrides[get_db_session] = _db_session
    app.dependency_overrides[get_audit_service] = _audit_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
