"""Item value types.

Items have no fixed field set: they are JSON objects whose shape is
constrained only by the owning collection's schema at write time.
"""

from typing import Union

from ulid import ULID

JsonValue = Union[str, int, float, bool, None, list["JsonValue"], dict[str, "JsonValue"]]

Item = dict[str, JsonValue]

ITEM_ID_FIELD = "id"


def generate_item_id() -> str:
    """Generate a ULID (26 chars, lexically sortable by creation time)."""
    return str(ULID())


def with_item_id(item_id: str, data: Item) -> Item:
    """Return a copy of data with the identifier forced to item_id.

    The identifier is placed first; any caller-supplied 'id' is discarded.
    """
    fields = {key: value for key, value in data.items() if key != ITEM_ID_FIELD}
    return {ITEM_ID_FIELD: item_id, **fields}
