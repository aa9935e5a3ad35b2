"""Shared test fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool)
with the schema created from the ORM metadata. Redis is not initialised, so
rate limiting is bypassed unless a test patches it in.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crossfire.config import Settings
from crossfire.container import Services, build_services
from crossfire.database import close_db, get_engine, get_session_factory, init_db
from crossfire.db.base import Base
from crossfire.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "SecureP@ss1"


def make_settings(**overrides: object) -> Settings:
    """Settings with argon2 costs low enough for fast tests."""
    values: dict[str, object] = {
        "database_url": TEST_DATABASE_URL,
        "argon2_time_cost": 1,
        "argon2_memory_cost": 1024,
        "argon2_parallelism": 1,
        "seed_static_data": False,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh schema on a new in-memory database."""
    await init_db(TEST_DATABASE_URL)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield get_session_factory()
    await close_db()


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for setup and assertions."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def services(session_factory: async_sessionmaker[AsyncSession], settings: Settings) -> Services:
    return build_services(session_factory, settings)


@pytest_asyncio.fixture
async def client(services: Services) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to an app wired to the test services."""
    app = create_app()
    app.state.services = services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_user(
    client: AsyncClient,
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = DEFAULT_PASSWORD,
) -> dict:
    """Register through the API and return credentials plus the issued token."""
    response = await client.post("/api/auth/register", json={
        "username": username,
        "email": email,
        "password": password,
    })
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "username": username,
        "email": email,
        "password": password,
        "user_id": data["user"]["id"],
        "token": data["token"],
    }


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient) -> dict:
    return await register_user(client)


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, registered_user: dict) -> AsyncClient:
    """Client sending the registered user's bearer token."""
    client.headers["Authorization"] = f"Bearer {registered_user['token']}"
    return client


@pytest.fixture
def register(client: AsyncClient):  # noqa: ANN201
    """``await register(username=..., email=...)`` with the default password."""

    async def _register(**kwargs: str) -> dict:
        return await register_user(client, **kwargs)

    return _register
