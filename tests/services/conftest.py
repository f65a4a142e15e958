"""Service test fixtures — async SQLite DB, fixed clock, engine and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Every service shares one FixedClock pinned to NOW (advance() moves it)
    - get_engine dependency overridden so routes see the test DB and the fixed clock

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the upsert path uses the
      sqlite dialect's ON CONFLICT, which mirrors the PostgreSQL statement
"""

from uuid import uuid4

import pytest
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from lifebalance.config import Settings
from lifebalance.db.base import Base
import lifebalance.models  # noqa: F401
from lifebalance.api.dependencies import get_engine
from lifebalance.infrastructure.sql_repository import SqlProgressRepository
from lifebalance.services.engine import build_engine
from lifebalance.main import app

from tests.services.fixed_clock import FixedClock, SCENARIO_SCORES


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def repo(test_db):
    return SqlProgressRepository(test_db)


@pytest.fixture
def engine(repo, settings, clock):
    return build_engine(repo, settings, clock)


@pytest.fixture
async def client(test_session_factory, settings, clock):
    """FastAPI test client with the engine dependency overridden."""
    async def override_get_engine():
        async with test_session_factory() as session:
            yield build_engine(SqlProgressRepository(session), settings, clock)

    app.dependency_overrides[get_engine] = override_get_engine

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def subject_id():
    return uuid4()


@pytest.fixture
async def scenario(engine, subject_id):
    """Seven same-day entries: spiritual, family and social fall below 50."""
    for category, score in SCENARIO_SCORES.items():
        await engine.entries.upsert(subject_id, category, score)
    return subject_id
