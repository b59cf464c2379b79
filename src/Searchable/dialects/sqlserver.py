"""SQL-Server-like dialect."""

from __future__ import annotations

from Searchable.dialects.base import Dialect, GroupByStrategy, HavingReference, split_identifier


class SqlServerDialect(Dialect):
    """SQL-Server-like backend.

    Every selected table column must appear in GROUP BY, and ORDER BY is only
    valid on the outer query once the result is wrapped in a derived table.
    """

    name = "sqlserver"

    def like_operator(self) -> str:
        return "LIKE"

    def quote_identifier(self, column: str) -> str:
        return ".".join(f"[{part}]" for part in split_identifier(column))

    def aggregate_reference_in_having(self) -> HavingReference:
        return HavingReference.EXPRESSION

    def group_by_strategy(self) -> GroupByStrategy:
        return GroupByStrategy.ALL_COLUMNS
