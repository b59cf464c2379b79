"""Query builder used as the base query for relevance search."""

from __future__ import annotations

from Searchable.query.builder import BINDING_KINDS, Query
from Searchable.query.count import count_query

__all__ = ["BINDING_KINDS", "Query", "count_query"]
