"""Shared pytest fixtures for backend tests."""

import os
from typing import AsyncGenerator, Callable, Iterable, Iterator

# Settings are read at import time; give tests a secret and a throwaway
# database before anything from opsroom is imported
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-opsroom-tests")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from opsroom.config import settings
from opsroom.database import Base, get_db
from opsroom.main import app
from opsroom.services import room_service
from opsroom.services.auth_service import create_access_token

ALICE = "caller-alice"
BOB = "caller-bob"
CAROL = "caller-carol"


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Create a test database engine backed by a per-test SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'opsroom.db'}")

    # Enable foreign key support for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Clean up
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database dependency override.

    Every request gets its own session, as with the real get_db.
    """
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers_for(caller_id: str) -> dict:
    """Create authorization headers for a caller."""
    return {"Authorization": f"Bearer {create_access_token(caller_id)}"}


@pytest.fixture
def alice_headers() -> dict:
    """Authorization headers for the first test caller."""
    return auth_headers_for(ALICE)


@pytest.fixture
def bob_headers() -> dict:
    """Authorization headers for the second test caller."""
    return auth_headers_for(BOB)


@pytest.fixture
def carol_headers() -> dict:
    """Authorization headers for the third test caller."""
    return auth_headers_for(CAROL)


@pytest.fixture
def bootstrap_admin(monkeypatch) -> str:
    """Make ALICE a bootstrap admin for the duration of a test."""
    monkeypatch.setattr(settings, "bootstrap_admin_ids", ALICE)
    return ALICE


@pytest.fixture
def fixed_room_codes(monkeypatch) -> Callable[[Iterable[int]], None]:
    """Make room code generation return the given codes in order."""
    def install(codes: Iterable[int]) -> None:
        sequence: Iterator[int] = iter(codes)
        monkeypatch.setattr(room_service, "generate_room_code", lambda: next(sequence))

    return install
