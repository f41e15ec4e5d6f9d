"""
Shared fixtures: a throwaway sqlite database, an HTTP client bound to the
application, and one user per role.
"""

import os
import tempfile
from typing import AsyncGenerator

_tmp_dir = tempfile.mkdtemp(prefix="events-tests-")
os.environ.setdefault("APP_DATABASE_URL", f"sqlite+aiosqlite:///{_tmp_dir}/test.db")
os.environ.setdefault("APP_UPLOAD_DIR", os.path.join(_tmp_dir, "uploads"))
os.environ.setdefault("APP_SECRET_KEY", "test-secret")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.api.events.models import EventCategories, Events  # noqa: E402
from app.api.users.models import SystemRole, Users  # noqa: E402
from app.asgi import application  # noqa: E402
from app.db.base import AbstractSQLModel  # noqa: E402
from app.db.core import AsyncSessionLocal, engine  # noqa: E402
from app.db.listeners import add_loader_criteria  # noqa: E402
from factories import make_category, make_event, make_user  # noqa: E402


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield a session, then drop everything."""
    async with engine.begin() as conn:
        await conn.run_sync(AbstractSQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        add_loader_criteria(session)
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(AbstractSQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def super_admin(db_session: AsyncSession) -> Users:
    return await make_user(db_session, "root_admin", SystemRole.SUPER_ADMIN)


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> Users:
    return await make_user(db_session, "organizer_one", SystemRole.ADMIN)


@pytest_asyncio.fixture
async def other_admin(db_session: AsyncSession) -> Users:
    return await make_user(db_session, "organizer_two", SystemRole.ADMIN)


@pytest_asyncio.fixture
async def user(db_session: AsyncSession) -> Users:
    return await make_user(db_session, "plain_user")


@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> EventCategories:
    return await make_category(db_session)


@pytest_asyncio.fixture
async def event(db_session: AsyncSession, admin: Users, category) -> Events:
    return await make_event(db_session, admin, category)
