"""Pytest fixtures for unit and integration tests."""
from datetime import date
from typing import AsyncGenerator, Optional

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.main import app
from app.models.base import Base
from app.models.child import Child
from app.models.task import Task
from app.models.user import User

# Use in-memory SQLite for tests (aiomysql requires MySQL/MariaDB)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    # StaticPool keeps the single in-memory database alive across connections
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    TestSession = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestSession() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client with DB override."""
    app.dependency_overrides[get_db] = lambda: db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def two_families(db):
    """Two parents with one child each."""
    parent_a = User(email="a@example.com", display_name="ParentA")
    parent_b = User(email="b@example.com", display_name="ParentB")
    db.add_all([parent_a, parent_b])
    await db.flush()

    child_a = Child(user_id=parent_a.id, name="Alice", grade="5")
    child_b = Child(user_id=parent_b.id, name="Bob", grade="6")
    db.add_all([child_a, child_b])
    await db.flush()
    return parent_a, parent_b, child_a, child_b


@pytest_asyncio.fixture
async def make_task(db):
    """Factory fixture: `await make_task(child, "Reading", days_mask=2)`."""

    async def _make(
        child: Child,
        name: str,
        subject: str = "Math",
        days_mask: int = 127,
        default_minutes: int = 15,
        sort_order: int = 0,
        is_archived: bool = False,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Task:
        task = Task(
            user_id=child.user_id,
            child_id=child.id,
            name=name,
            subject=subject,
            days_mask=days_mask,
            default_minutes=default_minutes,
            sort_order=sort_order,
            is_archived=is_archived,
            start_date=start_date,
            end_date=end_date,
        )
        db.add(task)
        await db.flush()
        return task

    return _make
