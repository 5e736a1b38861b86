"""Exceptions raised by the ItemVault core.

Each kind maps to a distinct outcome at the boundary (tool results and HTTP
status codes), so callers match on the class rather than on message text.
"""


class ItemVaultError(Exception):
    """Base class for all ItemVault errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ItemVaultError):
    """Raised when an item or a collection schema fails validation.

    Attributes:
        errors: One message per violated rule, in report order.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = list(errors) if errors else [message]
        super().__init__(message)


class NotFoundError(ItemVaultError):
    """Raised when a collection or item identifier has no matching record."""

    def __init__(self, resource: str, identifier: str) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with id {identifier} not found")


class StructuralError(ItemVaultError):
    """Raised when a stored item document is not a JSON array."""

    pass


class StorageTransportError(ItemVaultError):
    """Raised when the object store cannot be reached or rejects a request."""

    pass
