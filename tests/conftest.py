"""Test fixtures — a fresh in-memory database per test.

Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own in-memory SQLite engine (aiosqlite) with the
   schema created from the models. StaticPool keeps the single connection
   alive for the whole test, so every session sees the same database.
2. Foreign keys are switched on per connection so the ON DELETE rules
   behave as they do on Postgres.
3. The app's get_db is overridden to hand out a new session per request,
   exactly like production. Auth is NOT mocked: tests register users and
   send real bearer tokens.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.config import settings
from taskboard.db.engine import get_db
from taskboard.db.models import Base
from taskboard.main import app

TEST_DB_URL = "sqlite+aiosqlite://"
PASSWORD = "secret1"


def _enable_foreign_keys(dbapi_connection, _record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """bcrypt at the minimum cost factor keeps the suite fast."""
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """Session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client against the app, backed by the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def register(client):
    """Register a user through the API.

    Returns the user dict plus `token` and ready-made auth `headers`.
    """
    async def _register(username: str, email: str | None = None, password: str = PASSWORD) -> dict:
        resp = await client.post(
            "/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return {
            **body["user"],
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _register


@pytest_asyncio.fixture()
async def alice(register):
    return await register("alice")


@pytest_asyncio.fixture()
async def bob(register):
    return await register("bob")


@pytest_asyncio.fixture()
async def carol(register):
    return await register("carol")


@pytest_asyncio.fixture()
async def team(client, alice):
    """Team "Eng" created by alice."""
    resp = await client.post("/teams", json={"name": "Eng"}, headers=alice["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest_asyncio.fixture()
async def team_with_bob(client, team, alice, bob):
    """alice's team with bob added as a second member."""
    resp = await client.post(
        f"/teams/{team['id']}/members",
        json={"userId": bob["id"]},
        headers=alice["headers"],
    )
    assert resp.status_code == 200, resp.text
    return team
