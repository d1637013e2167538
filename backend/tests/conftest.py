"""
Notes API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── sample_note_data: Field values matching the Note model
    ├── db_engine: In-memory SQLite engine with the notes table created
    ├── db_session_factory: Session factory bound to db_engine
    └── test_client: HTTPX AsyncClient wired to the app, store = db_engine
"""

import os
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set before any notes_api import reads settings
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def sample_note_data():
    now = datetime.now(timezone.utc)
    return {
        "id": 1,
        "title": "Groceries",
        "content": "Milk, eggs",
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def make_note_row(sample_note_data):
    """Builds a stand-in for an ORM Note row returned by the session."""

    def _make(**overrides):
        return SimpleNamespace(**{**sample_note_data, **overrides})

    return _make


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite database with the notes table.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    from notes_api.database import Base
    from notes_api.models.note import Note  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(db_session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    get_db_session is overridden to hand out sessions on the SQLite engine.
    ASGITransport does not run the lifespan, so startup never reaches for
    the PostgreSQL database from settings.
    """
    from notes_api.database import get_db_session
    from notes_api.main import app

    async def _test_db_session():
        async with db_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
