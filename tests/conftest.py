"""Pytest configuration for all tests."""

from pathlib import Path
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from itemvault.application.services import ToolContext
from itemvault.infrastructure.persistence.database import Base
from itemvault.infrastructure.storage import ItemStore, LocalObjectStore


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def object_store(tmp_path: Path) -> LocalObjectStore:
    """Object store writing under the test's temporary directory."""
    return LocalObjectStore(tmp_path / "objects")


@pytest.fixture
def item_store(object_store: LocalObjectStore) -> ItemStore:
    return ItemStore(object_store)


@pytest.fixture
def tool_context(db_session: AsyncSession, item_store: ItemStore) -> ToolContext:
    return ToolContext(session=db_session, item_store=item_store)


@pytest.fixture
def product_schema() -> dict[str, Any]:
    """Schema with a required string name and a required numeric value."""
    return {
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "value": {"type": "number"},
            "tags": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["name", "value"],
    }


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, item_store: ItemStore
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency and local storage."""
    from itemvault.infrastructure.api.app import app
    from itemvault.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.state.item_store = item_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}
    app.state.item_store = None
