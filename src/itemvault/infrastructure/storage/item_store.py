"""Persistence of collection item lists as JSON documents.

Each collection owns exactly one document: a JSON array holding every item,
in insertion order. Reads and writes always move the whole array.
"""

import asyncio
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from itemvault.core.exceptions import StructuralError
from itemvault.core.logging import get_logger
from itemvault.domain.entities import Item
from itemvault.infrastructure.storage.base import JSON_CONTENT_TYPE, ObjectStore

logger = get_logger(__name__)

DEFAULT_KEY_PREFIX = "collections/"


class ItemStore:
    """Loads and saves the item list of a collection.

    The object store container is created lazily before the first read or
    write. Saves overwrite the whole document; concurrent writers in other
    processes are last-write-wins.
    """

    def __init__(self, object_store: ObjectStore, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        """Initialize the store.

        Args:
            object_store: Backend holding the documents.
            key_prefix: Prefix prepended to every document key.
        """
        self.object_store = object_store
        self.key_prefix = key_prefix
        self._locks: dict[str, asyncio.Lock] = {}

    def key_for(self, collection_id: str) -> str:
        """Return the document key of a collection's item list."""
        return f"{self.key_prefix}{collection_id}.json"

    @asynccontextmanager
    async def lock(self, collection_id: str) -> AsyncIterator[None]:
        """Serialize load/save cycles on one collection within this process."""
        lock = self._locks.setdefault(collection_id, asyncio.Lock())
        async with lock:
            yield

    async def load(self, collection_id: str) -> list[Item]:
        """Load the item list of a collection.

        Returns:
            The stored items, or an empty list if no document exists yet.

        Raises:
            StructuralError: If the stored document is not a JSON array of
                objects.
        """
        await self.object_store.ensure_container()
        key = self.key_for(collection_id)
        body = await self.object_store.get_object(key)
        if not body:
            return []

        try:
            items = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("Item document is not valid JSON", key=key, error=str(e))
            raise StructuralError(f"Invalid items document {key}: {str(e)}") from e

        if not isinstance(items, list):
            logger.error(
                "Item document is not an array",
                key=key,
                found_type=type(items).__name__,
            )
            raise StructuralError(f"Invalid items document {key}: expected array")

        for position, item in enumerate(items):
            if not isinstance(item, dict):
                logger.error(
                    "Item document holds a non-object element",
                    key=key,
                    position=position,
                    found_type=type(item).__name__,
                )
                raise StructuralError(
                    f"Invalid items document {key}: element {position} is not an object"
                )

        return items

    async def save(self, collection_id: str, items: list[Item]) -> None:
        """Replace the item list of a collection."""
        await self.object_store.ensure_container()
        body = json.dumps(items, indent=2, ensure_ascii=False).encode("utf-8")
        await self.object_store.put_object(
            self.key_for(collection_id), body, content_type=JSON_CONTENT_TYPE
        )
        logger.debug("Items saved", collection_id=collection_id, count=len(items))

    async def delete(self, collection_id: str) -> None:
        """Remove the item document of a collection, if any."""
        await self.object_store.ensure_container()
        await self.object_store.delete_object(self.key_for(collection_id))
        logger.info("Item document deleted", collection_id=collection_id)
