"""Fuzzy search over an in-memory item list.

A query matches a field value when it is close to some substring of it
(rapidfuzz's partial ratio). Values shorter than the query are compared as
whole strings by Levenshtein similarity, so every query character missing
from the value counts as an error. A threshold of 0.0 accepts only exact
substring matches and 1.0 accepts everything.
"""

from collections.abc import Iterable, Sequence

from rapidfuzz import fuzz, utils
from rapidfuzz.distance import Levenshtein

from itemvault.domain.entities import Item, JsonValue

DEFAULT_THRESHOLD = 0.4


def _searchable_text(value: JsonValue) -> Iterable[str]:
    if isinstance(value, bool):
        yield "true" if value else "false"
    elif isinstance(value, (str, int, float)):
        yield str(value)
    elif isinstance(value, list):
        for element in value:
            if not isinstance(element, (list, dict)):
                yield from _searchable_text(element)


def _similarity(query: str, text: str) -> float:
    """Score a processed query against one processed field value, 0 to 100."""
    if not text:
        return 0.0
    if len(text) >= len(query):
        return fuzz.partial_ratio(query, text)
    return Levenshtein.normalized_similarity(query, text) * 100.0


def _score(item: Item, keys: Sequence[str], query: str) -> float:
    best = 0.0
    for key in keys:
        if key not in item:
            continue
        for text in _searchable_text(item[key]):
            best = max(best, _similarity(query, utils.default_process(text)))
            if best == 100.0:
                return best
    return best


def fuzzy_search(
    items: Sequence[Item],
    query: str,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[Item]:
    """Return the items matching query, best match first.

    Only the keys of the first item are searched; fields that appear
    exclusively on later items are not indexed.

    Args:
        items: The full item list of a collection.
        query: Free-text query, typos tolerated up to the threshold.
        threshold: Maximum normalized distance (0.0 to 1.0) for a match.

    Returns:
        Matching items without score metadata.
    """
    if not items or not query or not query.strip():
        return []
    processed_query = utils.default_process(query)
    if not processed_query:
        return []

    keys = list(items[0].keys())
    min_similarity = (1.0 - threshold) * 100.0

    scored: list[tuple[float, int, Item]] = []
    for position, item in enumerate(items):
        score = _score(item, keys, processed_query)
        if score > 0 and score >= min_similarity:
            scored.append((score, position, item))

    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [item for _, _, item in scored]
