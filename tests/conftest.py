"""Pytest configuration and shared fixtures"""

import os

# Settings are read at import time; point them at throwaway resources first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["RESEND_API_KEY"] = "re_test_key"
os.environ["NOTIFICATION_RECIPIENTS"] = "pm@example.com,site@example.com"

import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from estate_pulse.main import app
from estate_pulse.database import Base, get_db
from estate_pulse.models import Project, Unit

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_data():
    """Sample project payload in the camelCase wire format"""
    return {
        "name": "Palm Grove",
        "status": "in-progress",
        "progress": 40,
        "totalUnits": 2,
        "completedUnits": 0,
        "targetCompletion": "December 15th, 2025",
        "currentPhase": "Structure",
        "manager": "Amina Odhiambo",
        "location": "Kilifi",
        "startDate": "Jan 10, 2024",
        "budget": "KES 450M",
        "targetMilestone": "Roof on block A",
        "challenges": ["Delayed tile delivery"],
    }


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create an in-memory test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing"""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """Create async test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def add_project(db_session: AsyncSession, name: str, created_at: datetime, **fields) -> Project:
    """Insert a project row directly, bypassing the gateway"""
    project = Project(name=name, created_at=created_at, updated_at=created_at, **fields)
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


async def add_unit(db_session: AsyncSession, project: Project, unit_number: str, **fields) -> Unit:
    """Insert a unit row directly, bypassing the gateway"""
    fields.setdefault("type", "Villa")
    fields.setdefault("status", "in-progress")
    unit = Unit(project_id=project.id, unit_number=unit_number, **fields)
    db_session.add(unit)
    await db_session.commit()
    await db_session.refresh(unit)
    return unit


@pytest_asyncio.fixture
async def sample_project(db_session: AsyncSession) -> Project:
    """Project with three units inserted out of unit-number order"""
    project = await add_project(
        db_session,
        "Palm Grove",
        datetime(2024, 1, 10, 9, 0, 0),
        status="in-progress",
        progress=55,
        total_units=3,
        completed_units=1,
        manager="Amina Odhiambo",
        location="Kilifi",
        target_milestone="Roof on block A",
        weekly_notes="Roofing crew finished block B",
        challenges=["Delayed tile delivery", "Water supply interruptions"],
    )
    await add_unit(db_session, project, "B-01", type="Apartment", progress=20)
    await add_unit(
        db_session,
        project,
        "A-01",
        status="completed",
        progress=100,
        photos=["https://cdn.example.com/a.jpg"],
    )
    await add_unit(db_session, project, "A-02", progress=60, challenges=["Awaiting fittings"])
    return project


@pytest_asyncio.fixture
async def second_project(db_session: AsyncSession, sample_project: Project) -> Project:
    """A later project without units"""
    return await add_project(
        db_session,
        "Coral Heights",
        sample_project.created_at + timedelta(days=30),
        status="planning",
    )
