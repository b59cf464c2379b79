"""Relevance expression compiler and query composer."""

from __future__ import annotations

from Searchable.compiler.composer import QueryComposer, default_threshold, format_threshold
from Searchable.compiler.relevance import build_column_expression

__all__ = [
    "QueryComposer",
    "build_column_expression",
    "default_threshold",
    "format_threshold",
]
