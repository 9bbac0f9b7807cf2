"""
Page/limit helpers for list endpoints.
"""

from typing import Any, Dict, List, Optional, Tuple

MAX_PAGE_SIZE = 100


def normalize_page(page: Optional[int], limit: Optional[int], default_limit: int = 10) -> Tuple[int, int]:
    """Clamp page to >= 1 and limit to 1..MAX_PAGE_SIZE, falling back to defaults."""
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else default_limit
    return page, min(limit, MAX_PAGE_SIZE)


async def fetch_page(
    collection,
    query: Dict[str, Any],
    sort: List[Tuple[str, int]],
    page: int,
    limit: int,
    projection: Optional[Dict[str, Any]] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Run a paged find plus a count over the same query.

    Returns:
        (documents for the page, total matching documents)
    """
    cursor = collection.find(query, projection) if projection else collection.find(query)
    cursor = cursor.sort(sort).skip((page - 1) * limit).limit(limit)

    docs = await cursor.to_list(length=limit)
    total = await collection.count_documents(query)
    return docs, total
