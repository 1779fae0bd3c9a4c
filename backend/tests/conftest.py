"""Pytest configuration and shared fixtures for service and API tests."""

import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

# Set test DB before app imports so config/engine use it
_TEST_DB = Path(tempfile.gettempdir()) / "hydration_tracker_test.db"
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB}")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "10000/minute")

from hydration_tracker.core.auth import create_access_token
from hydration_tracker.db.base import Base
from hydration_tracker.db.session import engine, init_db
from hydration_tracker.main import app
import hydration_tracker.models  # noqa: F401 - register tables on Base.metadata

OWNER = "user-1"
OTHER_OWNER = "user-2"


@pytest_asyncio.fixture
async def ensure_db():
    """Create tables on the app engine; dispose pooled connections so each test's loop starts fresh."""
    await init_db()
    yield
    await engine.dispose()


async def _truncate_all():
    """Delete all rows in reverse dependency order so tests start clean (SQLite has no TRUNCATE)."""
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest_asyncio.fixture
async def clean_db(ensure_db):
    await _truncate_all()
    yield


@pytest_asyncio.fixture
async def client(clean_db):
    """Yield AsyncClient bound to the app on a clean database."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token(OWNER)}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {create_access_token(OTHER_OWNER)}"}


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Private SQLite file per test for service-level tests."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'intakes.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session
