"""Pytest configuration and fixtures.

Points the app at an in-memory SQLite database before any contentforge
module is imported, and blanks provider credentials so nothing reaches a
real service.
"""

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
BACKEND = os.path.join(ROOT, "backend")
if BACKEND not in sys.path:
    sys.path.insert(0, BACKEND)

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
for _key in (
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "FAL_KEY",
    "REPLICATE_API_TOKEN",
    "GEMINI_API_KEY",
    "GOOGLE_TTS_API_KEY",
    "VOICEMAKER_API_KEY",
    "OPENAI_API_KEY",
    "MINIMAX_API_KEY",
    "MINIMAX_GROUP_ID",
    "FISH_AUDIO_API_KEY",
    "ELEVENLABS_API_KEY",
    "PEXELS_API_KEY",
    "PIXABAY_API_KEY",
    "FIRECRAWL_API_KEY",
):
    os.environ[_key] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from contentforge.database import Base, get_db
from contentforge.main import app
import contentforge.models  # noqa: F401


@pytest.fixture
def client():
    """TestClient backed by a fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    state = {"ready": False}

    async def override_get_db():
        if not state["ready"]:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            state["ready"] = True
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
