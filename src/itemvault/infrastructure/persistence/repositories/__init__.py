"""Persistence repositories for database operations."""

from itemvault.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)

__all__ = [
    "CollectionRepository",
]
