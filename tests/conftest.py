import os

# Settings are read at import time; point them at test values first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Import Base + all models so metadata is complete
from app.models.base import Base
from app.models.agent import Agent  # noqa: F401
from app.models.list_item import ListItem  # noqa: F401

from app.core import security
from app.core.config import settings
from app.core.db import build_engine, get_db
from app.main import app

from tests.fixtures_seed import five_agents, make_agents  # noqa: F401

ADMIN_HEADERS = {"X-Admin-Key": settings.admin_api_key}


def _test_db_url(tmp_path) -> str:
    # One SQLite file per test unless a shared test database is configured
    return os.getenv("DATABASE_URL_TEST") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture(autouse=True)
def _fast_password_hashing(monkeypatch):
    monkeypatch.setattr(security, "PBKDF2_ITERATIONS", 1_000)


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    engine = build_engine(_test_db_url(tmp_path))
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine):
    return async_sessionmaker(bind=async_engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest_asyncio.fixture
async def client(session_factory, upload_dir):
    """
    HTTP client whose requests each get a fresh session on the test database.
    """
    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test", headers=ADMIN_HEADERS) as ac:
        yield ac

    app.dependency_overrides.clear()
