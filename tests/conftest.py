"""Test fixtures and configuration."""

import json

import pytest
from unittest.mock import AsyncMock
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.auth.sessions import SESSION_PREFIX, SETTINGS_PERMISSIONS
from src.database import get_db
from src.models.base import Base
from src.redis_client import get_redis
from src.settings.service import SettingsService

ADMIN_TOKEN = "admin-token"
READER_TOKEN = "reader-token"


@pytest.fixture
async def db_engine():
    """In-memory SQLite engine with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def service(db_session):
    """SettingsService bound to the test session."""
    return SettingsService(db_session)


@pytest.fixture
def mock_redis():
    """Mock Redis client."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.setex = AsyncMock()
    redis.delete = AsyncMock()
    return redis


@pytest.fixture
def session_redis(mock_redis):
    """Mock Redis holding one admin and one read-only session."""
    sessions = {
        f"{SESSION_PREFIX}{ADMIN_TOKEN}": json.dumps(
            {"user_id": "admin", "permissions": list(SETTINGS_PERMISSIONS)}
        ),
        f"{SESSION_PREFIX}{READER_TOKEN}": json.dumps(
            {"user_id": "reader", "permissions": ["settings:read"]}
        ),
    }
    mock_redis.get = AsyncMock(side_effect=lambda key: sessions.get(key))
    return mock_redis


@pytest.fixture
async def client(session_factory, session_redis):
    """HTTP client against the app, wired to the test database and Redis."""
    from src.main import app

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_redis():
        return session_redis

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_redis] = _get_redis
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def reader_headers():
    return {"Authorization": f"Bearer {READER_TOKEN}"}
