"""Object storage backends and the item list store."""

from itemvault.infrastructure.storage.base import JSON_CONTENT_TYPE, ObjectStore
from itemvault.infrastructure.storage.item_store import ItemStore
from itemvault.infrastructure.storage.local_object_store import LocalObjectStore
from itemvault.infrastructure.storage.s3_object_store import (
    S3ObjectStore,
    S3StorageSettings,
)
from itemvault.infrastructure.storage.storage_service import (
    build_item_store,
    build_object_store,
)

__all__ = [
    "ItemStore",
    "JSON_CONTENT_TYPE",
    "LocalObjectStore",
    "ObjectStore",
    "S3ObjectStore",
    "S3StorageSettings",
    "build_item_store",
    "build_object_store",
]
