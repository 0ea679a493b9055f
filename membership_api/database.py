"""
Membership API - Database Session Management
============================================

What:  Async SQLAlchemy engine/session factory builders and the per-request
       session dependency.
How:   The application lifespan builds one engine and one session factory
       from Settings and stores them on `app.state`. `get_db_session` hands
       each request its own AsyncSession from that factory, so tests can swap
       in an in-memory SQLite engine without touching module state.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from Settings.
    pool_recycle=3600 recycles connections every hour.
    SQLite URLs skip the pool arguments (aiosqlite does not support them).
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from membership_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, Alembic and the
    optional create_all() run at startup.
    """
    pass


# ── Engine & Session Factory ──────────────────────────────────────────────
def create_engine(app_settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured database URL.

    SQL echo follows LOG_LEVEL=DEBUG.
    """
    kwargs = {"echo": app_settings.log_level == "DEBUG"}
    if not app_settings.is_sqlite:
        kwargs.update(
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            pool_pre_ping=app_settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(app_settings.database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: records stay readable after the repository commits
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create every mapped table that does not exist yet."""
    # Registers Member and Course on Base.metadata
    from membership_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory on app.state
        2. Yields it to the route handler (repositories commit their own writes)
        3. On error: rolls back anything left uncommitted
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/members")
        async def list_members(db: AsyncSession = Depends(get_db_session)):
            return await member_repository.list(db)
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
