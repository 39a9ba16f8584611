"""Pytest configuration and fixtures."""

import asyncio
import os
import tempfile
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

# Settings are read at import time, so the environment is prepared first.
_TEST_DIR = Path(tempfile.mkdtemp(prefix="studycards-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'app.db'}"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from studycards.database import Base, get_db  # noqa: E402
from studycards.main import app  # noqa: E402
from studycards.review.store import get_review_store  # noqa: E402


@pytest.fixture
def session_factory(tmp_path: Path) -> Generator[async_sessionmaker[AsyncSession], None, None]:
    """Fresh SQLite database with all tables for each test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cards.db'}", poolclass=NullPool)

    async def create_all() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_all())

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    asyncio.run(engine.dispose())


@pytest.fixture
def client(session_factory: async_sessionmaker[AsyncSession]) -> Generator[TestClient, Any, None]:
    """Create a test client bound to the per-test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    get_review_store().clear()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    get_review_store().clear()


@pytest.fixture
def make_card(client: TestClient):
    """Create a card through the API and return its JSON."""

    def _make_card(**overrides: Any) -> dict[str, Any]:
        payload = {
            "topic": "Zugversuch",
            "type": "Formel",
            "title": "Spannung",
            "content": "Technische Spannung",
        }
        payload.update(overrides)
        response = client.post("/api/v1/cards", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_card
