"""Collection service for business logic.

Handles creation, lookup, update, search and deletion of collection
metadata. Schemas are checked for structural validity before being stored.
"""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from itemvault.core.exceptions import NotFoundError, ValidationError
from itemvault.core.logging import get_logger
from itemvault.domain.entities import Collection
from itemvault.domain.services.schema_validator import check_schema
from itemvault.infrastructure.persistence.models import CollectionModel
from itemvault.infrastructure.persistence.repositories import CollectionRepository
from itemvault.infrastructure.storage.item_store import ItemStore

logger = get_logger(__name__)


def to_entity(model: CollectionModel) -> Collection:
    """Convert a collection row into a domain entity."""
    return Collection(
        id=model.id,
        title=model.title,
        description=model.description,
        schema=model.schema,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class CollectionService:
    """Service for collection business logic."""

    def __init__(self, session: AsyncSession, item_store: ItemStore | None = None) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
            item_store: When given, deleting a collection also deletes its
                item document.
        """
        self.session = session
        self.repository = CollectionRepository(session)
        self.item_store = item_store

    @staticmethod
    def _check_title(title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Collection validation failed: title must not be empty")

    @staticmethod
    def _check_schema(schema: Any) -> None:
        errors = check_schema(schema)
        if errors:
            raise ValidationError(errors[0], errors=errors)

    async def _get_model(self, collection_id: str) -> CollectionModel:
        model = await self.repository.get_by_id(collection_id)
        if model is None:
            raise NotFoundError("Collection", collection_id)
        return model

    async def create(self, title: str, description: str, schema: dict[str, Any]) -> Collection:
        """Create a new collection.

        Raises:
            ValidationError: If the title is empty or the schema is not a
                valid JSON Schema object.
        """
        self._check_title(title)
        self._check_schema(schema)

        model = CollectionModel(
            id=str(uuid.uuid4()),
            title=title.strip(),
            description=description or "",
            schema=schema,
        )
        model = await self.repository.create(model)
        await self.session.commit()

        logger.info("Collection created", collection_id=model.id, title=model.title)
        return to_entity(model)

    async def find(self, collection_id: str) -> Collection | None:
        """Get a collection by ID, or None if it does not exist."""
        model = await self.repository.get_by_id(collection_id)
        return to_entity(model) if model is not None else None

    async def get(self, collection_id: str) -> Collection:
        """Get a collection by ID.

        Raises:
            NotFoundError: If no collection has this ID.
        """
        return to_entity(await self._get_model(collection_id))

    async def get_all(self) -> list[Collection]:
        """List every collection, oldest first."""
        return [to_entity(model) for model in await self.repository.list_all()]

    async def update(
        self,
        collection_id: str,
        title: str | None = None,
        description: str | None = None,
        schema: dict[str, Any] | None = None,
    ) -> Collection:
        """Update any subset of title, description and schema.

        Existing items are not re-validated against a changed schema.

        Raises:
            NotFoundError: If no collection has this ID.
            ValidationError: If a new title or schema is invalid.
        """
        if title is not None:
            self._check_title(title)
        if schema is not None:
            self._check_schema(schema)

        model = await self._get_model(collection_id)
        if title is not None:
            model.title = title.strip()
        if description is not None:
            model.description = description
        if schema is not None:
            model.schema = schema

        model = await self.repository.update(model)
        await self.session.commit()

        logger.info(
            "Collection updated",
            collection_id=collection_id,
            schema_changed=schema is not None,
        )
        return to_entity(model)

    async def delete(self, collection_id: str) -> None:
        """Delete a collection and, when an item store is set, its items.

        Raises:
            NotFoundError: If no collection has this ID.
        """
        model = await self._get_model(collection_id)
        await self.repository.delete(model)
        await self.session.commit()

        if self.item_store is not None:
            await self.item_store.delete(collection_id)

        logger.info(
            "Collection deleted",
            collection_id=collection_id,
            items_deleted=self.item_store is not None,
        )

    async def search(self, query: str) -> list[Collection]:
        """Find collections whose title contains query, ignoring case."""
        return [to_entity(model) for model in await self.repository.search_by_title(query)]
