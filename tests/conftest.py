"""
Pytest configuration for internal portal backend tests.

Each test gets its own SQLite database file. Requests run in their own
session, committed or rolled back like production; assertions read back
through the API or a fresh session.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-internal-portal-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from internal_portal.core.database import get_db
from internal_portal.core.dependencies import get_current_internal_user, get_redis
from internal_portal.core.security import hash_password
from internal_portal.main import app
from internal_portal.models import Base, InternalUser, Organization, User
from internal_portal.workers import api_sync_tasks

STAFF_PASSWORD = "password123"


class FakeRedis:
    """In-memory stand-in for the few redis.asyncio calls the app makes."""

    def __init__(self) -> None:
        self.store: dict[str, tuple[str, int]] = {}

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self.store[key] = (value, ttl)
        return True

    async def exists(self, *keys: str) -> int:
        return sum(1 for key in keys if key in self.store)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging test data."""
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Background tasks
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def queued_tasks(monkeypatch) -> list[tuple[str, dict[str, Any]]]:
    """Record platform API pushes instead of sending them to a broker."""
    calls: list[tuple[str, dict[str, Any]]] = []

    def recorder(name: str):
        def delay(**kwargs: Any) -> None:
            calls.append((name, kwargs))
        return delay

    monkeypatch.setattr(
        api_sync_tasks.register_organization, "delay", recorder("register_organization")
    )
    monkeypatch.setattr(
        api_sync_tasks.deregister_organization, "delay", recorder("deregister_organization")
    )
    return calls


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest_asyncio.fixture
async def staff(db_session: AsyncSession) -> InternalUser:
    """A signed-in staff member."""
    internal_user = InternalUser(
        email="staff@agency.gov",
        name="Staff Member",
        password_hash=hash_password(STAFF_PASSWORD),
        is_active=True,
    )
    db_session.add(internal_user)
    await db_session.commit()
    return internal_user


def _override_db(session_factory: async_sessionmaker[AsyncSession]):
    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return _get_test_db


@pytest_asyncio.fixture
async def anon_client(session_factory, fake_redis) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with no staff session."""
    app.dependency_overrides[get_db] = _override_db(session_factory)
    app.dependency_overrides[get_redis] = lambda: fake_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(anon_client: AsyncClient, staff: InternalUser) -> AsyncClient:
    """HTTP client signed in as the staff fixture."""
    app.dependency_overrides[get_current_internal_user] = lambda: staff
    return anon_client


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_organization(db_session: AsyncSession):
    async def _make(**overrides: Any) -> Organization:
        fields = {"name": "Happy Clinic", "organization_type": "primary_care_clinic"}
        fields.update(overrides)
        organization = Organization(**fields)
        db_session.add(organization)
        await db_session.commit()
        return organization

    return _make


@pytest.fixture
def make_user(db_session: AsyncSession):
    counter = iter(range(1, 10_000))

    async def _make(**overrides: Any) -> User:
        n = next(counter)
        fields = {
            "email": f"user{n}@clinic.org",
            "first_name": "Ann",
            "last_name": "Lee",
            "organization": "Happy Clinic",
            "organization_type": "primary_care_clinic",
            "num_providers": 0,
            "address_1": "1 Main St",
            "city": "Austin",
            "state": "TX",
            "zip": "78701",
            "agree_to_terms": True,
            "created_at": datetime(2026, 1, n % 28 + 1, 12, 0, tzinfo=UTC),
        }
        organizations = overrides.pop("organizations", [])
        fields.update(overrides)
        user = User(**fields, organizations=organizations)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make
