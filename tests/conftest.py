"""
Membership API - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite, one
       shared connection through StaticPool) with the tables created.

Fixture Hierarchy:
    engine                → in-memory SQLite engine with tables
    ├── db_session        → AsyncSession for repository tests
    └── app               → create_app() wired to the engine
        └── test_client   → HTTPX AsyncClient over ASGITransport
    mock_db_session       → AsyncMock session for store-failure paths
"""

import os

# Override settings BEFORE any app imports so the module-level app never
# points at a real database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from membership_api.config import Settings
from membership_api.database import create_session_factory, create_tables


@pytest.fixture
def test_settings():
    return Settings(database_url="sqlite+aiosqlite://", log_level="WARNING")


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine; one connection shared by every session."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


def build_app(app_settings, engine, session_factory):
    """create_app() with the test engine attached (ASGITransport skips lifespan)."""
    from membership_api.main import create_app

    application = create_app(app_settings)
    application.state.engine = engine
    application.state.session_factory = session_factory
    return application


@pytest.fixture
def app(test_settings, engine, session_factory):
    return build_app(test_settings, engine, session_factory)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def legacy_client(engine, session_factory):
    """Client for an app running with NULL_ON_MISSING=true."""
    legacy_settings = Settings(
        database_url="sqlite+aiosqlite://",
        log_level="WARNING",
        null_on_missing=True,
    )
    application = build_app(legacy_settings, engine, session_factory)
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for simulating store failures.

    Usage:
        mock_db_session.get.side_effect = OperationalError("SELECT", {}, Exception("down"))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_member_payload():
    return {
        "name": "Ada",
        "surname": "Lovelace",
        "email": "a@x.com",
        "age": 30,
        "membershipType": "gold",
        "picture": "",
    }


@pytest.fixture
def sample_course_payload():
    return {
        "title": "Analytical Engines",
        "description": "Programming the difference engine",
        "instructorName": "Charles",
        "instructorSurname": "Babbage",
        "schedule": "2024-09-01T09:00:00Z",
    }
