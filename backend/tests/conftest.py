"""
Pytest fixtures for test database, client, and authentication.

Every test gets its own in-memory SQLite database (aiosqlite), so no
PostgreSQL or Redis instance is needed to run the suite.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_ENABLED", "false")

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import eventra.models  # noqa: F401 - registers every table on Base.metadata
from eventra.core.security import get_token_service, hash_password
from eventra.db.base import Base
from eventra.db.session import get_db
from eventra.main import app
from eventra.models.enums import EventCategory, EventStatus, UserRole
from eventra.models.event import Event
from eventra.models.user import User
from eventra.models.venue import Venue

TEST_DATABASE_URL = "sqlite+aiosqlite://"
USER_PASSWORD = "testpassword123"
ADMIN_PASSWORD = "adminpassword123"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh database with all tables, yielding one session for the test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db: AsyncSession, email: str, username: str, password: str, role=UserRole.USER) -> User:
    user = User(
        email=email,
        username=username,
        first_name=username.capitalize(),
        second_name="Tester",
        hashed_password=hash_password(password),
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def _headers(user: User) -> dict:
    return {"Authorization": f"Bearer {get_token_service().create_access_token(user)}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "test@example.com", "testuser", USER_PASSWORD)


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "other@example.com", "otheruser", USER_PASSWORD)


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "admin@example.com", "adminuser", ADMIN_PASSWORD, role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    """Authorization headers with Bearer token."""
    return _headers(test_user)


@pytest_asyncio.fixture
async def other_headers(other_user: User) -> dict:
    return _headers(other_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict:
    return _headers(admin_user)


@pytest_asyncio.fixture
async def venue(db_session: AsyncSession) -> Venue:
    venue = Venue(
        name="Test Hall",
        address="1 Test Street",
        city="Testville",
        capacity=200,
        price_per_hour=Decimal("100.00"),
        is_active=True,
    )
    db_session.add(venue)
    await db_session.commit()
    await db_session.refresh(venue)
    return venue


async def _create_event(db: AsyncSession, organizer: User, **overrides) -> Event:
    fields = dict(
        title="Test Meetup",
        description="A test event",
        date=datetime.now(timezone.utc) + timedelta(days=30),
        location="Test Venue",
        max_attendees=100,
        current_attendees=0,
        category=EventCategory.MEETUP,
        status=EventStatus.PUBLISHED,
        is_free=True,
        created_by=organizer.id,
    )
    fields.update(overrides)
    event = Event(**fields)
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


@pytest_asyncio.fixture
async def free_event(db_session: AsyncSession, admin_user: User) -> Event:
    """Free event with 100 seats, organised by the admin."""
    return await _create_event(db_session, admin_user)


@pytest_asyncio.fixture
async def paid_event(db_session: AsyncSession, admin_user: User) -> Event:
    """Paid event at 50.00 per ticket."""
    return await _create_event(
        db_session,
        admin_user,
        title="Paid Concert",
        location="Concert Hall",
        category=EventCategory.CONCERT,
        is_free=False,
        ticket_price=Decimal("50.00"),
    )


@pytest_asyncio.fixture
async def nearly_full_event(db_session: AsyncSession, admin_user: User) -> Event:
    """Free event with 9 of 10 seats taken."""
    return await _create_event(
        db_session,
        admin_user,
        title="Nearly Full Workshop",
        max_attendees=10,
        current_attendees=9,
        category=EventCategory.WORKSHOP,
    )


@pytest_asyncio.fixture
def make_event(db_session: AsyncSession):
    """Factory for events with custom fields."""

    async def _make(organizer: User, **overrides) -> Event:
        return await _create_event(db_session, organizer, **overrides)

    return _make
