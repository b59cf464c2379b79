"""Searchable: relevance-ranked search queries over plain SQL tables.

Builds a weighted relevance score from exact, prefix and substring matches
of the words of a search phrase, across MySQL-like, Postgres-like,
SQL-Server-like and SQLite dialects, without a full-text index.
"""

from __future__ import annotations

from Searchable.compiler import QueryComposer, build_column_expression
from Searchable.core.errors import ConfigurationError
from Searchable.core.models import Expression, JoinSpec, SearchSpec
from Searchable.core.tokenizer import tokenize
from Searchable.dialects import get_dialect
from Searchable.query import Query, count_query
from Searchable.services import SearchableModel, create_searchable

__all__ = [
    "ConfigurationError",
    "Expression",
    "JoinSpec",
    "Query",
    "QueryComposer",
    "SearchSpec",
    "SearchableModel",
    "build_column_expression",
    "count_query",
    "create_searchable",
    "get_dialect",
    "tokenize",
]
