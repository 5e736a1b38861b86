"""SQLAlchemy models for ItemVault tables.

All models inherit from the Base class defined in database.py.
"""

from itemvault.infrastructure.persistence.models.collection import CollectionModel

__all__ = [
    "CollectionModel",
]
