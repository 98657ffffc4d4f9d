"""
Shared fixtures.

- Environment is pinned BEFORE the app is imported so Settings never picks
  up real provider keys.
- Each test gets its own SQLite file database.
- Providers are stubs; no test talks to a real model.
"""

import os

os.environ["GEMINI_API_KEY"] = ""
os.environ["GROQ_API_KEY"] = ""
os.environ["AUTH_JWT_SECRET"] = "test-jwt-secret"
os.environ["AUTH_JWKS_URL"] = ""
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_career_coach.db"
os.environ["GENERATION_RATE_LIMIT"] = "1000/hour"

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from career_coach.database import Base, get_db
from career_coach.main import app
from career_coach.middleware.rate_limit import limiter
from career_coach.models import IndustryInsight, User  # noqa: F401  (register tables)
from career_coach.services.ai_providers import get_generator
from career_coach.utils import metrics

from helpers import ProviderPair


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def providers():
    return ProviderPair()


@pytest.fixture
async def client(session_factory, providers):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generator] = providers.generator
    limiter.reset()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
