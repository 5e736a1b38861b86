"""Unit tests for CollectionRepository."""

import uuid

import pytest

from itemvault.infrastructure.persistence.models import CollectionModel
from itemvault.infrastructure.persistence.repositories import CollectionRepository


def _model(title: str, schema: dict | None = None) -> CollectionModel:
    return CollectionModel(
        id=str(uuid.uuid4()),
        title=title,
        description="",
        schema=schema or {"type": "object"},
    )


@pytest.mark.asyncio
async def test_create_populates_timestamps(db_session):
    repo = CollectionRepository(db_session)

    created = await repo.create(_model("Books"))

    assert created.created_at is not None
    assert created.updated_at is not None


@pytest.mark.asyncio
async def test_get_by_id(db_session):
    repo = CollectionRepository(db_session)
    created = await repo.create(_model("Books", {"type": "object", "required": ["isbn"]}))

    found = await repo.get_by_id(created.id)

    assert found is not None
    assert found.schema == {"type": "object", "required": ["isbn"]}


@pytest.mark.asyncio
async def test_get_by_id_missing(db_session):
    assert await CollectionRepository(db_session).get_by_id("missing") is None


@pytest.mark.asyncio
async def test_list_all(db_session):
    repo = CollectionRepository(db_session)
    first = await repo.create(_model("First"))
    second = await repo.create(_model("Second"))

    assert [c.id for c in await repo.list_all()] == [first.id, second.id]


@pytest.mark.asyncio
async def test_search_by_title(db_session):
    repo = CollectionRepository(db_session)
    await repo.create(_model("Movie Night"))
    await repo.create(_model("Groceries"))

    results = await repo.search_by_title("MOVIE")

    assert [c.title for c in results] == ["Movie Night"]


@pytest.mark.asyncio
async def test_update_and_delete(db_session):
    repo = CollectionRepository(db_session)
    created = await repo.create(_model("Books"))

    created.title = "Library"
    await repo.update(created)
    assert (await repo.get_by_id(created.id)).title == "Library"

    await repo.delete(created)
    assert await repo.get_by_id(created.id) is None
