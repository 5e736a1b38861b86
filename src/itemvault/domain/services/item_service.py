"""Item service for business logic.

Handles create, read, update, delete and search of the items of one
collection. Every write validates against the collection schema and
rewrites the collection's full item list.
"""

from typing import Any

from itemvault.core.exceptions import NotFoundError, ValidationError
from itemvault.core.logging import get_logger
from itemvault.domain.entities import (
    ITEM_ID_FIELD,
    Collection,
    Item,
    generate_item_id,
    with_item_id,
)
from itemvault.domain.services.item_search import DEFAULT_THRESHOLD, fuzzy_search
from itemvault.domain.services.schema_validator import validate_item
from itemvault.infrastructure.storage.item_store import ItemStore

logger = get_logger(__name__)


class ItemService:
    """Service for the items of a single collection."""

    def __init__(
        self,
        collection: Collection,
        item_store: ItemStore,
        search_threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        """Initialize the service.

        Args:
            collection: The collection whose items are managed.
            item_store: Store holding the item lists.
            search_threshold: Fuzzy match tolerance used by search().
        """
        self.collection = collection
        self.item_store = item_store
        self.search_threshold = search_threshold

    def _validate(self, data: Any) -> None:
        result = validate_item(data, self.collection.schema)
        if not result.valid:
            logger.info(
                "Item validation failed",
                collection_id=self.collection.id,
                errors=result.errors,
            )
            raise ValidationError(
                f"Item validation failed: {', '.join(result.errors)}",
                errors=result.errors,
            )

    def _not_found(self, item_id: str) -> NotFoundError:
        return NotFoundError("Item", item_id)

    async def add(self, data: Item) -> Item:
        """Validate and append a new item.

        Any 'id' supplied by the caller is replaced by a fresh ULID.

        Raises:
            ValidationError: If data does not satisfy the collection schema.
        """
        self._validate(data)

        async with self.item_store.lock(self.collection.id):
            items = await self.item_store.load(self.collection.id)
            item = with_item_id(generate_item_id(), data)
            items.append(item)
            await self.item_store.save(self.collection.id, items)

        logger.info(
            "Item added",
            collection_id=self.collection.id,
            item_id=item[ITEM_ID_FIELD],
            count=len(items),
        )
        return item

    async def get(self, item_id: str) -> Item:
        """Get an item by ID.

        Raises:
            NotFoundError: If no item has this ID.
        """
        items = await self.item_store.load(self.collection.id)
        for item in items:
            if item.get(ITEM_ID_FIELD) == item_id:
                return item
        raise self._not_found(item_id)

    async def get_all(self) -> list[Item]:
        """Return every item in insertion order."""
        return await self.item_store.load(self.collection.id)

    async def update(self, item_id: str, data: Item) -> Item:
        """Replace all fields of an item, keeping its ID.

        Raises:
            ValidationError: If data does not satisfy the collection schema.
            NotFoundError: If no item has this ID.
        """
        self._validate(data)

        async with self.item_store.lock(self.collection.id):
            items = await self.item_store.load(self.collection.id)
            index = next(
                (i for i, item in enumerate(items) if item.get(ITEM_ID_FIELD) == item_id),
                None,
            )
            if index is None:
                raise self._not_found(item_id)

            updated = with_item_id(item_id, data)
            items[index] = updated
            await self.item_store.save(self.collection.id, items)

        logger.info("Item updated", collection_id=self.collection.id, item_id=item_id)
        return updated

    async def remove(self, item_id: str) -> None:
        """Delete an item.

        Raises:
            NotFoundError: If no item has this ID. Nothing is written.
        """
        async with self.item_store.lock(self.collection.id):
            items = await self.item_store.load(self.collection.id)
            remaining = [item for item in items if item.get(ITEM_ID_FIELD) != item_id]
            if len(remaining) == len(items):
                raise self._not_found(item_id)
            await self.item_store.save(self.collection.id, remaining)

        logger.info(
            "Item removed",
            collection_id=self.collection.id,
            item_id=item_id,
            count=len(remaining),
        )

    async def search(self, query: str) -> list[Item]:
        """Fuzzy-search the items, best match first."""
        items = await self.item_store.load(self.collection.id)
        if not items:
            return []
        results = fuzzy_search(items, query, threshold=self.search_threshold)
        logger.debug(
            "Items searched",
            collection_id=self.collection.id,
            query=query,
            matches=len(results),
        )
        return results
