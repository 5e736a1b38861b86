"""Pydantic schemas for item endpoints.

Items are free-form JSON objects shaped by their collection's schema, so
request and response bodies are plain dicts.
"""

from typing import Any

from pydantic import BaseModel


class ItemSearchResponse(BaseModel):
    """Response for an item search, best match first."""

    query: str
    count: int
    results: list[dict[str, Any]]
