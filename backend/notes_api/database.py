"""
Notes API — Database Session Management
========================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with a bounded connection pool, provides a
       session dependency that rolls back on error and always closes.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy:
    pool_size / max_overflow: cap concurrent store access
    pool_timeout:             bounded acquire; an exhausted pool raises
                              sqlalchemy.exc.TimeoutError instead of hanging
    pool_pre_ping:            validates connections before use
    pool_recycle=3600:        recycles connections every hour

Engine creation does not open a connection; the first query does.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,
    # SQL echo only in DEBUG mode
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: returned Note objects stay readable after commit,
# so responses can be built without another round trip.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the service issues its one statement)
        3. On error: rolls back the transaction
        4. Always: closes the session (returns the connection to the pool)

    Writes are committed by the service right after their statement, so a
    failed commit is reported as a store failure of that request.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_database() -> bool:
    """
    What:  Creates the `notes` table if it does not exist yet.
    When:  Called once during application startup (lifespan handler).
    How:   metadata.create_all checks for each table first, so repeated
           startups against an existing schema are no-ops.

    Returns True on success. A failure is logged and swallowed: the service
    still starts, and requests that need the store answer 500 until the
    database becomes reachable.
    """
    # Register models on Base.metadata before create_all
    from notes_api.models.note import Note  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error("Error initializing database: %s", str(e), exc_info=True)
        return False

    logger.info("Database initialized successfully")
    return True


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
