"""Construction of the configured object store and item store."""

from itemvault.core.config import Settings
from itemvault.core.logging import get_logger
from itemvault.infrastructure.storage.base import ObjectStore
from itemvault.infrastructure.storage.item_store import ItemStore
from itemvault.infrastructure.storage.local_object_store import LocalObjectStore
from itemvault.infrastructure.storage.s3_object_store import S3ObjectStore, S3StorageSettings

logger = get_logger(__name__)


def build_object_store(settings: Settings) -> ObjectStore:
    """Create the object store selected by settings.storage_backend."""
    if settings.storage_backend == "local":
        logger.info("Using local object store", path=settings.local_storage_path)
        return LocalObjectStore(settings.local_storage_path)

    if settings.storage_backend == "s3":
        logger.info(
            "Using S3 object store",
            bucket=settings.s3_bucket,
            endpoint_url=settings.s3_endpoint_url,
        )
        return S3ObjectStore(
            S3StorageSettings(
                bucket=settings.s3_bucket,
                region=settings.s3_region,
                access_key_id=settings.s3_access_key_id,
                secret_access_key=settings.s3_secret_access_key,
                endpoint_url=settings.s3_endpoint_url,
                force_path_style=settings.s3_force_path_style,
            )
        )

    raise ValueError(f"Unsupported storage backend: {settings.storage_backend}")


def build_item_store(settings: Settings) -> ItemStore:
    """Create the item store on top of the configured object store."""
    return ItemStore(build_object_store(settings), key_prefix=settings.item_key_prefix)
