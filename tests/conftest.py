# tests/conftest.py

from __future__ import annotations

import os

# 必须在 import todo_app 之前设置：Settings 在模块加载时读取并缓存
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_SCHEMA"] = ""
os.environ["REDIS_URL"] = "redis://127.0.0.1:6379/15"
os.environ["ENV"] = "test"

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from todo_app.cache.redis_client import get_redis
from todo_app.db.engine import get_db
from todo_app.db.models import Base
from todo_app.security.auth import AuthenticatedUser

from .fakes import FakeRedis

PASSWORD = "secret123"


@pytest_asyncio.fixture()
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """
    Real SQLite database per test (file-backed so every session sees the same data).
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'todo.sqlite3'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture()
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def alice() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-alice", username="alice", name="Alice")


@pytest.fixture()
def bob() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-bob", username="bob", name="Bob")


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def app(session_factory: async_sessionmaker[AsyncSession], fake_redis: FakeRedis):
    """FastAPI app with database and Redis swapped for test doubles."""
    from todo_app.main import app as fastapi_app

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = _get_db
    fastapi_app.dependency_overrides[get_redis] = lambda: fake_redis
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app) -> AsyncIterator[httpx.AsyncClient]:
    # ASGITransport does not run the lifespan, so no real PG / Redis warm-up happens
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def signup(client: httpx.AsyncClient, username: str) -> dict[str, str]:
    """Register + login, return the Authorization header."""
    resp = await client.post("/auth/register", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 201, resp.text
    resp = await client.post("/auth/login", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest_asyncio.fixture()
async def alice_headers(client: httpx.AsyncClient) -> dict[str, str]:
    return await signup(client, "alice")


@pytest_asyncio.fixture()
async def bob_headers(client: httpx.AsyncClient) -> dict[str, str]:
    return await signup(client, "bob")
