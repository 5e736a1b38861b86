"""Collection entity.

A collection is a named bucket of items. Its schema is a JSON Schema document
that every item written to the collection must satisfy.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Collection:
    """Collection entity.

    Attributes:
        id: Unique identifier (UUID string).
        title: Human-readable title.
        description: Free-text description of what the collection holds.
        schema: JSON Schema describing the shape of items.
        created_at: Timestamp when the collection was created.
        updated_at: Timestamp when the collection was last updated.
    """

    id: str
    title: str
    description: str
    schema: dict[str, Any]
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        """Validate collection data after initialization."""
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.title:
            raise ValueError("Collection title is required")
        if not isinstance(self.schema, dict):
            raise ValueError("Schema must be a dictionary")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with ISO timestamps."""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data
