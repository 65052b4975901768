"""
Shared helpers for the resource wrappers.
"""

from itertools import islice
from typing import Any, Callable, Dict, Iterable, List, Optional

MAX_PER_PAGE = 100


def take(records: Iterable[Any], limit: Optional[int]) -> List[Any]:
    """Consume a lazy record stream, stopping (and fetching no further) at `limit`."""
    if limit is not None and limit < 1:
        raise ValueError("limit must be a positive integer.")
    return list(islice(records, limit))


def shape_all(
    records: Iterable[Any], shape: Callable[[Dict[str, Any]], Dict[str, Any]]
) -> List[Dict[str, Any]]:
    return [shape(r) for r in records if isinstance(r, dict)]


def quoted_query(query: str) -> str:
    """Filter endpoints expect the query language string wrapped in double quotes."""
    query = (query or "").strip()
    if not query:
        raise ValueError("query must not be empty.")
    if query.startswith('"') and query.endswith('"') and len(query) > 1:
        return query
    return f'"{query}"'
