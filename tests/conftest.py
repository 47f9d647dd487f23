import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# FORCE TESTING MODE
# Must happen BEFORE importing app.main: settings and the DB engine
# are built at import time.
# ------------------------------------------------------------------
_TEST_DIR = tempfile.mkdtemp(prefix="campus-events-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
for _var in ("REDIS_URL", "SUPER_ADMIN_EMAIL", "SUPER_ADMIN_PASSWORD"):
    os.environ.pop(_var, None)

from sqlmodel import SQLModel

from app.main import app
from app.core.database import engine, AsyncSessionLocal
from app.core.security import create_access_token
from app.models.enums import EventStatus
from app.models.event import Event
from app.models.event_registration import EventRegistration
from app.models.user import UserRole
from app.services.auth_service import create_user, identity_from_user


@pytest_asyncio.fixture(autouse=True)
async def prepare_database():
    """Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session():
    async with AsyncSessionLocal() as session:
        yield session


# ------------------------------------------------------------------
# ACCOUNTS
# ------------------------------------------------------------------
@pytest.fixture
def create_account(db_session):
    async def _create(
        role=UserRole.Student,
        name=None,
        email=None,
        password="password123",
        department="Computer Science",
        interests=None,
    ):
        email = email or f"{role.value}.{uuid.uuid4().hex[:8]}@college.com"
        return await create_user(
            db_session,
            name or f"Test {role.value.title()}",
            email,
            password,
            role,
            department=department,
            interests=interests,
        )
    return _create


@pytest.fixture
def headers_for():
    def _headers(user):
        token = create_access_token(subject=str(user.id), data={"role": user.role.value})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def identity_of():
    return identity_from_user


@pytest_asyncio.fixture
async def admin(create_account):
    return await create_account(UserRole.Admin, name="Admin User", department="Administration")


@pytest_asyncio.fixture
async def hod(create_account):
    return await create_account(UserRole.HOD, name="Dr. Priya Sharma")


@pytest_asyncio.fixture
async def student(create_account):
    return await create_account(UserRole.Student, name="Aarav Patel", interests=["Coding", "AI/ML"])


# ------------------------------------------------------------------
# EVENTS (inserted directly, bypassing the HOD workflow)
# ------------------------------------------------------------------
@pytest.fixture
def create_event(db_session):
    async def _create(
        organizer,
        status=EventStatus.Approved,
        capacity=10,
        category="Coding",
        days_ahead=7,
        title=None,
        registered=(),
    ):
        event = Event(
            title=title or f"Event {uuid.uuid4().hex[:6]}",
            description="A campus event",
            organizer_id=organizer.id,
            date=datetime.now(timezone.utc) + timedelta(days=days_ahead),
            venue="Main Auditorium",
            category=category,
            status=status,
            capacity=capacity,
            registered_count=len(registered),
        )
        db_session.add(event)
        await db_session.flush()

        for user in registered:
            db_session.add(EventRegistration(event_id=event.id, user_id=user.id))

        await db_session.commit()
        await db_session.refresh(event)
        return event
    return _create
