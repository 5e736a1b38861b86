"""Pydantic schemas for collection endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CreateCollectionRequest(BaseModel):
    """Request body for creating a new collection."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255, description="Collection title")
    description: str = Field(default="", description="What the collection is for")
    schema_: dict[str, Any] = Field(
        ...,
        alias="schema",
        description="JSON Schema that every item in the collection must satisfy",
    )

    def to_arguments(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class UpdateCollectionRequest(BaseModel):
    """Request body for updating a collection. Omitted fields are unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")

    def to_arguments(self, collection_id: str) -> dict[str, Any]:
        return {"collectionId": collection_id, **self.model_dump(by_alias=True, exclude_none=True)}


class CollectionResponse(BaseModel):
    """Response for a single collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    schema_: dict[str, Any] = Field(alias="schema")
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Response carrying a confirmation message."""

    message: str
