"""Unit tests for S3ObjectStore."""

from io import BytesIO
from unittest import mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from itemvault.core.exceptions import StorageTransportError
from itemvault.infrastructure.storage.s3_object_store import S3ObjectStore, S3StorageSettings

BOTO3_CLIENT = "itemvault.infrastructure.storage.s3_object_store.boto3.client"


def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def _store(**overrides) -> S3ObjectStore:
    settings = {
        "bucket": "collections",
        "region": "us-east-1",
        "access_key_id": "minioadmin",
        "secret_access_key": "minioadmin",
    }
    settings.update(overrides)
    return S3ObjectStore(S3StorageSettings(**settings))


@pytest.fixture
def s3_store() -> S3ObjectStore:
    return _store()


def test_client_uses_endpoint_and_path_style():
    store = _store(endpoint_url="http://localhost:9000", force_path_style=True)

    with mock.patch(BOTO3_CLIENT) as mock_client:
        store._get_client()

    _, kwargs = mock_client.call_args
    assert kwargs["endpoint_url"] == "http://localhost:9000"
    assert kwargs["config"].s3 == {"addressing_style": "path"}


@pytest.mark.asyncio
async def test_ensure_container_existing_bucket(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        mock_client.return_value = client

        await s3_store.ensure_container()
        await s3_store.ensure_container()

    client.head_bucket.assert_called_once_with(Bucket="collections")
    client.create_bucket.assert_not_called()


@pytest.mark.asyncio
async def test_ensure_container_creates_missing_bucket(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.head_bucket.side_effect = _client_error("404", "Not Found", "HeadBucket")
        mock_client.return_value = client

        await s3_store.ensure_container()

    client.create_bucket.assert_called_once_with(Bucket="collections")


@pytest.mark.asyncio
async def test_ensure_container_sets_location_outside_us_east_1():
    store = _store(region="eu-west-1")

    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.head_bucket.side_effect = _client_error("NoSuchBucket", "missing", "HeadBucket")
        mock_client.return_value = client

        await store.ensure_container()

    client.create_bucket.assert_called_once_with(
        Bucket="collections",
        CreateBucketConfiguration={"LocationConstraint": "eu-west-1"},
    )


@pytest.mark.asyncio
async def test_ensure_container_tolerates_concurrent_creation(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.head_bucket.side_effect = _client_error("404", "Not Found", "HeadBucket")
        client.create_bucket.side_effect = _client_error(
            "BucketAlreadyOwnedByYou", "yours", "CreateBucket"
        )
        mock_client.return_value = client

        await s3_store.ensure_container()


@pytest.mark.asyncio
async def test_ensure_container_access_denied(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.head_bucket.side_effect = _client_error("403", "Forbidden", "HeadBucket")
        mock_client.return_value = client

        with pytest.raises(StorageTransportError):
            await s3_store.ensure_container()


@pytest.mark.asyncio
async def test_get_object_returns_body(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.get_object.return_value = {"Body": BytesIO(b"[]")}
        mock_client.return_value = client

        body = await s3_store.get_object("collections/c1.json")

    assert body == b"[]"
    client.get_object.assert_called_once_with(Bucket="collections", Key="collections/c1.json")


@pytest.mark.asyncio
async def test_get_object_missing_key_returns_none(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.get_object.side_effect = _client_error("NoSuchKey", "missing", "GetObject")
        mock_client.return_value = client

        assert await s3_store.get_object("collections/c1.json") is None


@pytest.mark.asyncio
async def test_get_object_transport_failure(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.get_object.side_effect = EndpointConnectionError(
            endpoint_url="http://localhost:9000"
        )
        mock_client.return_value = client

        with pytest.raises(StorageTransportError) as exc_info:
            await s3_store.get_object("collections/c1.json")

    assert isinstance(exc_info.value.__cause__, EndpointConnectionError)


@pytest.mark.asyncio
async def test_put_object_sets_content_type(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        mock_client.return_value = client

        await s3_store.put_object("collections/c1.json", b"[]")

    client.put_object.assert_called_once_with(
        Bucket="collections",
        Key="collections/c1.json",
        Body=b"[]",
        ContentType="application/json",
    )


@pytest.mark.asyncio
async def test_put_object_failure(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.put_object.side_effect = _client_error("500", "Internal", "PutObject")
        mock_client.return_value = client

        with pytest.raises(StorageTransportError):
            await s3_store.put_object("collections/c1.json", b"[]")


@pytest.mark.asyncio
async def test_test_connection_failure_reports_code(s3_store):
    with mock.patch(BOTO3_CLIENT) as mock_client:
        client = mock.MagicMock()
        client.head_bucket.side_effect = _client_error("403", "Forbidden", "HeadBucket")
        mock_client.return_value = client

        ok, message = await s3_store.test_connection()

    assert ok is False
    assert "403" in message
