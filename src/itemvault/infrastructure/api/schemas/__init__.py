"""Pydantic schemas for API requests and responses."""

from itemvault.infrastructure.api.schemas.collection_schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    MessageResponse,
    UpdateCollectionRequest,
)
from itemvault.infrastructure.api.schemas.item_schemas import ItemSearchResponse
from itemvault.infrastructure.api.schemas.tool_schemas import FunctionSchema, ToolListResponse

__all__ = [
    "CollectionResponse",
    "CreateCollectionRequest",
    "FunctionSchema",
    "ItemSearchResponse",
    "MessageResponse",
    "ToolListResponse",
    "UpdateCollectionRequest",
]
