"""Async database connection and session management."""

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    """Pool options for the configured backend.

    SQLite (used for local runs and tests) does not accept queue pool sizing.
    """
    options = {"echo": settings.sql_echo}
    if settings.database_url.startswith("sqlite"):
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=15,  # Fail fast - let polling clients retry rather than hang
        pool_pre_ping=True,
        pool_recycle=3600,
    )
    return options


engine = create_async_engine(settings.database_url, **_engine_options())

# Create async session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Declarative base for ORM models."""
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Async dependency injection for FastAPI.

    Auto-commits on success, rollbacks on exception.

    Usage:
        @router.get("/api/rooms")
        async def get_my_rooms(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_all_tables() -> None:
    """Create every mapped table that does not exist yet."""
    # Import models so they are registered with Base.metadata
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def ping_database() -> bool:
    """Run a trivial query to check the database is reachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database ping failed: {e}")
        return False
