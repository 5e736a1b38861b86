"""Unit tests for LocalObjectStore."""

import pytest

from itemvault.infrastructure.storage import LocalObjectStore


@pytest.mark.asyncio
async def test_put_and_get(object_store):
    await object_store.put_object("collections/a.json", b"[]")

    assert await object_store.get_object("collections/a.json") == b"[]"


@pytest.mark.asyncio
async def test_get_missing_returns_none(object_store):
    assert await object_store.get_object("collections/missing.json") is None


@pytest.mark.asyncio
async def test_put_leaves_no_temp_files(object_store):
    await object_store.put_object("collections/a.json", b"[1]")
    await object_store.put_object("collections/a.json", b"[2]")

    files = [p.name for p in (object_store.root_path / "collections").iterdir()]

    assert files == ["a.json"]
    assert await object_store.get_object("collections/a.json") == b"[2]"


@pytest.mark.asyncio
async def test_delete_missing_is_ok(object_store):
    await object_store.delete_object("collections/missing.json")


@pytest.mark.asyncio
async def test_key_outside_root_rejected(object_store):
    with pytest.raises(ValueError):
        await object_store.get_object("../escape.json")


@pytest.mark.asyncio
async def test_test_connection(tmp_path):
    store = LocalObjectStore(tmp_path / "store")

    ok, message = await store.test_connection()

    assert ok is True
    assert "writable" in message
