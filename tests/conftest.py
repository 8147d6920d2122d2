"""
Pytest configuration and fixtures.
"""

import os
from collections.abc import AsyncGenerator, Callable
from types import SimpleNamespace
from uuid import UUID

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "true"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-32chars!"
os.environ.pop("DATABASE_URL", None)

from database.models import Base  # noqa: E402
from database.repositories import PluginRepository, ThemeRepository, UserRepository  # noqa: E402


# ============ Database Fixtures ============


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite database in a temp directory with freshly created tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()


@pytest_asyncio.fixture
async def marketplace(session_factory) -> SimpleNamespace:
    """
    Seed three users and one theme and one plugin.

    - owner: publishes the theme and plugin
    - alice: regular user
    - admin: admin role
    """
    async with session_factory() as db_session:
        users = UserRepository(db_session)
        owner = await users.create(username="owner", email="owner@example.com")
        alice = await users.create(username="alice", email="alice@example.com")
        admin = await users.create(username="admin", role="admin")

        theme = await ThemeRepository(db_session).create(
            user_id=owner.id,
            name="Midnight",
            description="Dark theme",
            versions_count=2,
        )
        plugin = await PluginRepository(db_session).create(
            user_id=owner.id,
            name="Typing Indicator",
            versions_count=1,
        )
        await db_session.commit()

        return SimpleNamespace(
            owner_id=owner.id,
            alice_id=alice.id,
            admin_id=admin.id,
            theme_id=theme.id,
            plugin_id=plugin.id,
        )


# ============ App Fixtures ============


@pytest.fixture
def client() -> TestClient:
    """Synchronous test client (no database)."""
    from api.main import app

    return TestClient(app)


@pytest_asyncio.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Asynchronous test client with the session dependency pointed at the test database."""
    from api.dependencies import get_db_session
    from api.main import app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ============ Auth Fixtures ============


@pytest.fixture
def auth_headers() -> Callable[[UUID], dict[str, str]]:
    """Build Authorization headers carrying a token for the given user id."""
    from core.security import create_access_token

    def _headers(user_id: UUID) -> dict[str, str]:
        token = create_access_token(user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ============ Test Settings ============


@pytest.fixture
def test_settings(monkeypatch):
    """Override settings for testing."""
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key-for-testing-only-32chars!")

    # Clear cached settings
    from core.config import get_settings

    get_settings.cache_clear()

    yield

    # Restore cached settings
    get_settings.cache_clear()
