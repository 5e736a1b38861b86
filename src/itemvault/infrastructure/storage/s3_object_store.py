"""S3-compatible object store (AWS S3, MinIO, LocalStack)."""

import asyncio

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict

from itemvault.core.exceptions import StorageTransportError
from itemvault.core.logging import get_logger
from itemvault.infrastructure.storage.base import JSON_CONTENT_TYPE, ObjectStore

logger = get_logger(__name__)

MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}
MISSING_BUCKET_CODES = {"NoSuchBucket", "404", "NotFound"}
BUCKET_EXISTS_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}


class S3StorageSettings(BaseModel):
    """Connection settings for an S3-compatible bucket."""

    model_config = ConfigDict(from_attributes=True)

    bucket: str
    region: str
    access_key_id: str
    secret_access_key: str
    endpoint_url: str | None = None
    force_path_style: bool = False


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", "Unknown"))


class S3ObjectStore(ObjectStore):
    """Object store backed by a single S3 bucket.

    boto3 is synchronous, so every call runs in a worker thread.
    """

    def __init__(self, settings: S3StorageSettings) -> None:
        self.settings = settings
        self._client = None
        self._bucket_ready = False

    def _get_client(self):
        """Get or create the S3 client."""
        if self._client is None:
            client_kwargs = {
                "region_name": self.settings.region,
                "aws_access_key_id": self.settings.access_key_id,
                "aws_secret_access_key": self.settings.secret_access_key,
            }
            if self.settings.endpoint_url:
                client_kwargs["endpoint_url"] = self.settings.endpoint_url
            if self.settings.force_path_style:
                client_kwargs["config"] = Config(s3={"addressing_style": "path"})

            self._client = boto3.client("s3", **client_kwargs)
        return self._client

    async def _create_bucket(self) -> None:
        create_kwargs: dict = {"Bucket": self.settings.bucket}
        if self.settings.region != "us-east-1":
            create_kwargs["CreateBucketConfiguration"] = {
                "LocationConstraint": self.settings.region
            }
        try:
            await asyncio.to_thread(self._get_client().create_bucket, **create_kwargs)
            logger.info("Bucket created", bucket=self.settings.bucket)
        except ClientError as e:
            # Another process may have created it between head and create
            if _error_code(e) not in BUCKET_EXISTS_CODES:
                raise StorageTransportError(f"Failed to create bucket: {str(e)}") from e

    async def ensure_container(self) -> None:
        if self._bucket_ready:
            return

        try:
            await asyncio.to_thread(
                self._get_client().head_bucket, Bucket=self.settings.bucket
            )
        except ClientError as e:
            if _error_code(e) not in MISSING_BUCKET_CODES:
                raise StorageTransportError(f"Failed to access bucket: {str(e)}") from e
            await self._create_bucket()
        except BotoCoreError as e:
            raise StorageTransportError(f"Failed to access bucket: {str(e)}") from e

        self._bucket_ready = True

    async def get_object(self, key: str) -> bytes | None:
        try:
            response = await asyncio.to_thread(
                self._get_client().get_object,
                Bucket=self.settings.bucket,
                Key=key,
            )
        except ClientError as e:
            if _error_code(e) in MISSING_KEY_CODES:
                return None
            raise StorageTransportError(f"Failed to fetch object from S3: {str(e)}") from e
        except BotoCoreError as e:
            raise StorageTransportError(f"Failed to fetch object from S3: {str(e)}") from e

        body_stream = response.get("Body")
        if body_stream is None:
            return None
        return await asyncio.to_thread(body_stream.read)

    async def put_object(
        self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE
    ) -> None:
        try:
            await asyncio.to_thread(
                self._get_client().put_object,
                Bucket=self.settings.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageTransportError(f"Failed to upload object to S3: {str(e)}") from e

    async def delete_object(self, key: str) -> None:
        try:
            await asyncio.to_thread(
                self._get_client().delete_object,
                Bucket=self.settings.bucket,
                Key=key,
            )
        except ClientError as e:
            if _error_code(e) in MISSING_KEY_CODES:
                return
            raise StorageTransportError(f"Failed to delete object from S3: {str(e)}") from e
        except BotoCoreError as e:
            raise StorageTransportError(f"Failed to delete object from S3: {str(e)}") from e

    async def test_connection(self) -> tuple[bool, str | None]:
        try:
            await asyncio.to_thread(self._get_client().head_bucket, Bucket=self.settings.bucket)
            return True, (
                f"S3 connection successful. Bucket '{self.settings.bucket}' "
                f"is accessible in region '{self.settings.region}'."
            )
        except ClientError as e:
            error_code = _error_code(e)
            error_message = e.response.get("Error", {}).get("Message", str(e))
            return False, f"S3 connection failed ({error_code}): {error_message}"
        except BotoCoreError as e:
            return False, f"S3 connection failed: {str(e)}"
