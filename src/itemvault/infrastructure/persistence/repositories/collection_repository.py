"""Repository for collection operations.

Provides CRUD operations for the collections table.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from itemvault.infrastructure.persistence.models import CollectionModel


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Insert a new collection and return it with defaults populated."""
        self.session.add(collection)
        await self.session.flush()
        await self.session.refresh(collection)
        return collection

    async def get_by_id(self, collection_id: str) -> CollectionModel | None:
        """Get a collection by ID.

        Returns:
            The collection model if found, None otherwise.
        """
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[CollectionModel]:
        """List all collections, oldest first."""
        result = await self.session.execute(
            select(CollectionModel).order_by(
                CollectionModel.created_at.asc(), CollectionModel.id.asc()
            )
        )
        return list(result.scalars().all())

    async def search_by_title(self, query: str) -> list[CollectionModel]:
        """Case-insensitive substring search on title.

        LIKE wildcards in the query match literally.
        """
        result = await self.session.execute(
            select(CollectionModel)
            .where(func.lower(CollectionModel.title).contains(query.lower(), autoescape=True))
            .order_by(CollectionModel.created_at.asc(), CollectionModel.id.asc())
        )
        return list(result.scalars().all())

    async def update(self, collection: CollectionModel) -> CollectionModel:
        """Flush pending changes on a collection and return it."""
        await self.session.flush()
        await self.session.refresh(collection)
        return collection

    async def delete(self, collection: CollectionModel) -> None:
        """Delete a collection row."""
        await self.session.delete(collection)
        await self.session.flush()
