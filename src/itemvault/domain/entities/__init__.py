"""Domain entities for ItemVault.

Entities are plain Python types that represent core business concepts.
They have no dependencies on infrastructure or web frameworks.
"""

from itemvault.domain.entities.collection import Collection
from itemvault.domain.entities.item import (
    ITEM_ID_FIELD,
    Item,
    JsonValue,
    generate_item_id,
    with_item_id,
)

__all__ = [
    "Collection",
    "ITEM_ID_FIELD",
    "Item",
    "JsonValue",
    "generate_item_id",
    "with_item_id",
]
