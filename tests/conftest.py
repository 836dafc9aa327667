"""
Shared fixtures for the Elite Coach API tests.

Strategy:
- The test FastAPI app is built without startup hooks (no database, MinIO or mail).
- Every repository factory is overridden with an AsyncMock(spec=<Repository>),
  so endpoints and services run against the mocks.
- get_current_user is replaced with a lambda returning a fixed client or coach
  profile; role checks (require_coach) still run on top of it.
- Real JWTs are created through auth_service for the endpoints that decode
  the bearer themselves (role router, /auth/session).
- Repository queries and rollback behaviour run against a throwaway SQLite
  file (sqlite+aiosqlite) through the db_session and db_client fixtures.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from datetime import datetime
from typing import AsyncGenerator, Optional

from elite_coach.api.router import api_router
from elite_coach.core.base import Base
from elite_coach.core.db import get_db
import elite_coach.models  # noqa: F401
from elite_coach.models.profile import Profile, RoleEnum
from elite_coach.services.auth_service import auth_service
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.repositories.workout_repository import WorkoutRepository
from elite_coach.repositories.booking_repository import BookingRepository
from elite_coach.repositories.progress_repository import ProgressRepository
from elite_coach.repositories.engagement_repository import EngagementRepository
from elite_coach.repositories.broadcast_repository import BroadcastRepository
from elite_coach.repositories.contact_repository import ContactRepository
from elite_coach.core.dependencies import (
    get_current_user,
    get_profile_repository,
    get_workout_repository,
    get_booking_repository,
    get_progress_repository,
    get_engagement_repository,
    get_broadcast_repository,
    get_contact_repository,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Test FastAPI app without startup events."""
    test_app = FastAPI(title="Elite Coach Test App")
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_auth_headers(user: Profile) -> dict:
    """Authorization header with a valid access token for the given profile."""
    access_token = auth_service.create_access_token(
        data={"sub": str(user.id), "role": user.role.value}
    )
    return {"Authorization": f"Bearer {access_token}"}


def make_profile(user_id: int, role: RoleEnum = RoleEnum.client, **overrides) -> Profile:
    fields = dict(
        id=user_id,
        email=f"user{user_id}@example.com",
        full_name=f"User {user_id}",
        password="hashed",
        role=role,
        email_verified=True,
        created_at=datetime(2024, 6, 1, 9, 0),
    )
    fields.update(overrides)
    return Profile(**fields)


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> Profile:
    """Verified client."""
    return Profile(
        id=1,
        email="client@example.com",
        full_name="Jamie Client",
        password=auth_service.hash_password("password123"),
        role=RoleEnum.client,
        email_verified=True,
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def coach_fixture() -> Profile:
    """Verified coach."""
    return Profile(
        id=2,
        email="coach@example.com",
        full_name="Alex Coach",
        password=auth_service.hash_password("coach123"),
        role=RoleEnum.coach,
        email_verified=True,
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Repository mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """ProfileRepository mock (auth, role router, admin clients)."""
    return AsyncMock(spec=ProfileRepository)


@pytest.fixture
def mock_workout_repo() -> AsyncMock:
    return AsyncMock(spec=WorkoutRepository)


@pytest.fixture
def mock_booking_repo() -> AsyncMock:
    return AsyncMock(spec=BookingRepository)


@pytest.fixture
def mock_progress_repo() -> AsyncMock:
    return AsyncMock(spec=ProgressRepository)


@pytest.fixture
def mock_engagement_repo() -> AsyncMock:
    return AsyncMock(spec=EngagementRepository)


@pytest.fixture
def mock_broadcast_repo() -> AsyncMock:
    return AsyncMock(spec=BroadcastRepository)


@pytest.fixture
def mock_contact_repo() -> AsyncMock:
    return AsyncMock(spec=ContactRepository)


@pytest.fixture
def repos(
    mock_repo,
    mock_workout_repo,
    mock_booking_repo,
    mock_progress_repo,
    mock_engagement_repo,
    mock_broadcast_repo,
    mock_contact_repo,
) -> dict:
    return {
        get_profile_repository: mock_repo,
        get_workout_repository: mock_workout_repo,
        get_booking_repository: mock_booking_repo,
        get_progress_repository: mock_progress_repo,
        get_engagement_repository: mock_engagement_repo,
        get_broadcast_repository: mock_broadcast_repo,
        get_contact_repository: mock_contact_repo,
    }


def build_app(repos: dict, current_user: Optional[Profile] = None) -> FastAPI:
    app = create_test_app()
    def provide(mock):
        return lambda: mock

    for factory, mock in repos.items():
        app.dependency_overrides[factory] = provide(mock)
    if current_user is not None:
        app.dependency_overrides[get_current_user] = lambda: current_user
    return app


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(repos) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous client; bearer tokens are decoded for real."""
    app = build_app(repos)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(repos, user_fixture) -> AsyncGenerator[AsyncClient, None]:
    """Authenticated as the client profile."""
    app = build_app(repos, user_fixture)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def coach_client(repos, coach_fixture) -> AsyncGenerator[AsyncClient, None]:
    """Authenticated as the coach profile."""
    app = build_app(repos, coach_fixture)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------------------------
# Real database (SQLite)
# ---------------------------------------------------------------------------

@pytest.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'elite_coach.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    """Same session settings as the application's AsyncSessionLocal."""
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def db_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """App wired to the SQLite database: one session per request, no mocks."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app = create_test_app()
    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


async def seed_profile(session: AsyncSession, email: str, role: RoleEnum = RoleEnum.client, **fields) -> Profile:
    """Insert a verified profile and return it with its id assigned."""
    profile = Profile(
        email=email,
        full_name=fields.pop("full_name", email.split("@")[0].title()),
        password="hashed",
        role=role,
        email_verified=True,
        **fields,
    )
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    return profile
