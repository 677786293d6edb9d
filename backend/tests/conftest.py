"""
Shared fixtures: a throwaway SQLite database per test, a Storage bound to
it, catalog rows, and an HTTP client wired to the same database.
"""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import careerpath.models  # noqa: F401
from careerpath.auth import create_session_token
from careerpath.database import Base, enable_sqlite_foreign_keys, get_db
from careerpath.models import User, Skill, CareerPath, Course
from careerpath.services import Storage

CATALOG_EPOCH = datetime(2024, 1, 1)

CAREER_PATHS = [
    ("Data Scientist", ["Python", "Statistics", "SQL"], "high", "growing"),
    ("Software Engineer", ["Python", "JavaScript", "SQL"], "high", "growing"),
    ("UX Designer", ["UX Design", "Communication"], "medium", "growing"),
    ("Product Manager", ["Communication", "Leadership"], "high", "stable"),
    ("Cloud Engineer", ["Python", "Cloud Computing"], "high", "growing"),
    ("Financial Analyst", ["Statistics", "SQL"], "medium", "stable"),
    ("Security Analyst", ["Cybersecurity", "Communication"], "high", "growing"),
]

SKILLS = [
    ("Python", "technical"),
    ("JavaScript", "technical"),
    ("SQL", "technical"),
    ("Statistics", "domain-specific"),
    ("UX Design", "domain-specific"),
    ("Communication", "soft"),
    ("Leadership", "soft"),
    ("Cloud Computing", "technical"),
    ("Cybersecurity", "technical"),
]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(session):
    return Storage(session)


@pytest_asyncio.fixture
async def user(session):
    user = User(id="user-1", email="ada@example.com", first_name="Ada", last_name="Lovelace")
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def other_user(session):
    user = User(id="user-2", email="grace@example.com", first_name="Grace")
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def skills(session):
    """Catalog skills keyed by name."""
    rows = {name: Skill(name=name, category=category) for name, category in SKILLS}
    session.add_all(rows.values())
    await session.commit()
    return rows


@pytest_asyncio.fixture
async def career_paths(session):
    """Seven career paths with strictly increasing created_at."""
    rows = [
        CareerPath(
            title=title,
            required_skills=required,
            demand_level=demand,
            growth_outlook=outlook,
            salary_min=60000,
            salary_max=120000,
            created_at=CATALOG_EPOCH + timedelta(minutes=i),
        )
        for i, (title, required, demand, outlook) in enumerate(CAREER_PATHS)
    ]
    session.add_all(rows)
    await session.commit()
    return rows


@pytest_asyncio.fixture
async def courses(session, skills):
    rows = [
        Course(title="Intro to Python", provider="Coursera", rating=4.2,
               skills_covered=[skills["Python"].id]),
        Course(title="SQL Basics", provider="edX", rating=4.8,
               skills_covered=[skills["SQL"].id]),
        Course(title="Leading Teams", provider="LinkedIn Learning", rating=3.9,
               skills_covered=[skills["Leadership"].id]),
        Course(title="Unrated Course", provider="Udemy", rating=None, skills_covered=[]),
    ]
    session.add_all(rows)
    await session.commit()
    return rows


@pytest.fixture
def auth_headers():
    def _headers(user_id: str = "user-1") -> dict:
        return {"Authorization": f"Bearer {create_session_token(user_id)}"}
    return _headers


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client whose requests each get a fresh session on the test database."""
    from careerpath.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
