"""Row-count query for paginating search results."""

from __future__ import annotations

from typing import Any

from Searchable.query.builder import Query


def count_query(query: Query) -> tuple[str, list[Any]]:
    """Build ``select count(*)`` over a query without its ordering and paging.

    Args:
        query: Query to count; it is not modified.

    Returns:
        Tuple of (sql, bindings).
    """
    counted = query.copy()
    counted.orders = []
    counted.limit_value = None
    counted.offset_value = None
    return f"select count(*) as count from ({counted.to_sql()}) as results", counted.get_bindings()
