"""Domain services for ItemVault.

Services contain business logic that doesn't naturally fit within a single
entity: schema validation, item persistence rules and search.
"""

from itemvault.domain.services.collection_service import CollectionService
from itemvault.domain.services.item_search import DEFAULT_THRESHOLD, fuzzy_search
from itemvault.domain.services.item_service import ItemService
from itemvault.domain.services.schema_validator import (
    INVALID_SCHEMA_PREFIX,
    ValidationResult,
    check_schema,
    validate_item,
)

__all__ = [
    "CollectionService",
    "DEFAULT_THRESHOLD",
    "INVALID_SCHEMA_PREFIX",
    "ItemService",
    "ValidationResult",
    "check_schema",
    "fuzzy_search",
    "validate_item",
]
