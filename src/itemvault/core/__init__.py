"""Core ItemVault utilities.

This module exports core utilities for use throughout the application.
"""

from itemvault.core.config import Settings, get_settings
from itemvault.core.exceptions import (
    ItemVaultError,
    NotFoundError,
    StorageTransportError,
    StructuralError,
    ValidationError,
)
from itemvault.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "ItemVaultError",
    "NotFoundError",
    "Settings",
    "StorageTransportError",
    "StructuralError",
    "ValidationError",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
