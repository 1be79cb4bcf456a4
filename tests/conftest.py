"""Shared fixtures: in-memory SQLite database, per-role users and an HTTP client.

Every test gets a fresh database; get_async_session is overridden so routes
and auth dependencies share the test engine.
"""

import os

os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("AUTO_SEED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from paintshop.api.main import app
from paintshop.core.security import create_session_token, get_password_hash
from paintshop.db import models  # noqa: F401
from paintshop.db.base import Base
from paintshop.db.session import enable_sqlite_foreign_keys, get_async_session
from paintshop.repositories.security import UserRepository

PASSWORD = "secret123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="session")
def password_hash():
    return get_password_hash(PASSWORD)


async def _make_user(session_factory, password_hash, username, papel, ativo=True):
    async with session_factory() as session:
        return await UserRepository(session).create_user(
            username=username,
            email=f"{username}@paintshop.com",
            nome=username.capitalize(),
            senha_hash=password_hash,
            papel=papel,
            ativo=ativo,
        )


@pytest.fixture
async def admin_user(session_factory, password_hash):
    return await _make_user(session_factory, password_hash, "admin", "admin")


@pytest.fixture
async def manager_user(session_factory, password_hash):
    return await _make_user(session_factory, password_hash, "gerente", "manager")


@pytest.fixture
async def operator_user(session_factory, password_hash):
    return await _make_user(session_factory, password_hash, "operador", "operator")


@pytest.fixture
async def other_operator(session_factory, password_hash):
    return await _make_user(session_factory, password_hash, "pintor", "operator")


@pytest.fixture
async def inactive_user(session_factory, password_hash):
    return await _make_user(session_factory, password_hash, "inativo", "operator", ativo=False)


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user.id, user.username)}"}


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def manager_headers(manager_user):
    return auth_headers(manager_user)


@pytest.fixture
def operator_headers(operator_user):
    return auth_headers(operator_user)


@pytest.fixture
async def client(session_factory):
    """FastAPI test client with the DB dependency overridden."""

    async def override_get_async_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def other_operator_headers(other_operator):
    return auth_headers(other_operator)
