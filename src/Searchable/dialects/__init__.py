"""SQL dialect policies for relevance query generation."""

from __future__ import annotations

from Searchable.dialects.base import Dialect, GroupByStrategy, HavingReference
from Searchable.dialects.postgres import PostgresDialect
from Searchable.dialects.registry import get_dialect, supported_driver_names
from Searchable.dialects.sqlite import SqliteDialect
from Searchable.dialects.sqlserver import SqlServerDialect
from Searchable.dialects.standard import StandardDialect

__all__ = [
    "Dialect",
    "GroupByStrategy",
    "HavingReference",
    "StandardDialect",
    "PostgresDialect",
    "SqlServerDialect",
    "SqliteDialect",
    "get_dialect",
    "supported_driver_names",
]
