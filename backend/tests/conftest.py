"""Shared fixtures: in-memory database, token service and HTTP client."""
import os
from dataclasses import dataclass

# Must be set before any notekeeper import reads settings.
os.environ["NOTES_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["NOTES_SECRET_KEY"] = "test-secret-key"
os.environ["NOTES_ENV"] = "local"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notekeeper import models  # noqa: F401
from notekeeper.core.dependencies import get_db, get_token_service
from notekeeper.core.security import TokenService
from notekeeper.db.base import Base
from notekeeper.db.session import enable_sqlite_savepoints
from notekeeper.main import app

TEST_SECRET = "test-secret-key"
TEST_SALT = "test-salt"


@dataclass
class Account:
    user_id: int
    username: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def notes_url(self, suffix: str = "") -> str:
        return f"/users/{self.user_id}/notes{suffix}"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET, expires_in_seconds=3600, salt=TEST_SALT)


@pytest_asyncio.fixture
async def client(session_factory, token_service):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client, token_service):
    """Register a user over HTTP and return its account."""

    async def _register(username: str, password: str = "secret1") -> Account:
        resp = await client.post("/users/register", json={"username": username, "password": password})
        assert resp.status_code == 201, resp.text
        token = resp.json()["token"]
        identity = token_service.verify(token)
        return Account(user_id=identity.user_id, username=identity.username, token=token)

    return _register
