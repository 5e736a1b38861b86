"""Pytest configuration for unit tests."""

from typing import Any

import pytest

from itemvault.domain.entities import Collection


@pytest.fixture
def collection(product_schema: dict[str, Any]) -> Collection:
    """A product collection that exists only in memory."""
    return Collection(
        id="5f0c6a8e-1111-4c2b-9d8e-0123456789ab",
        title="Products",
        description="Things for sale",
        schema=product_schema,
    )
