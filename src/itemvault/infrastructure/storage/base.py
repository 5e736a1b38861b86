"""Base abstraction for object stores."""

from abc import ABC, abstractmethod

JSON_CONTENT_TYPE = "application/json"


class ObjectStore(ABC):
    """A flat key/value store of opaque byte documents.

    Keys are '/'-separated paths inside a single container (bucket or
    directory). Implementations must make put_object a full overwrite.
    """

    @abstractmethod
    async def ensure_container(self) -> None:
        """Create the container if it does not exist. Must be idempotent."""
        ...

    @abstractmethod
    async def get_object(self, key: str) -> bytes | None:
        """Return the document body, or None if the key does not exist."""
        ...

    @abstractmethod
    async def put_object(
        self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE
    ) -> None:
        """Write the document, replacing any previous content."""
        ...

    @abstractmethod
    async def delete_object(self, key: str) -> None:
        """Delete the document. A missing key is not an error."""
        ...

    @abstractmethod
    async def test_connection(self) -> tuple[bool, str | None]:
        """Test store connectivity and credentials."""
        ...
