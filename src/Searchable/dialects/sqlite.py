"""SQLite dialect."""

from __future__ import annotations

from Searchable.dialects.base import Dialect, GroupByStrategy, HavingReference, split_identifier


class SqliteDialect(Dialect):
    """SQLite backend, using the generic non-MySQL rules.

    SQLite's LIKE is already case-insensitive for ASCII; the LOWER() wrapper
    keeps the comparison portable for the exact tier.
    """

    name = "sqlite"

    def like_operator(self) -> str:
        return "LIKE"

    def quote_identifier(self, column: str) -> str:
        return ".".join(f"`{part}`" for part in split_identifier(column))

    def aggregate_reference_in_having(self) -> HavingReference:
        return HavingReference.EXPRESSION

    def group_by_strategy(self) -> GroupByStrategy:
        return GroupByStrategy.PRIMARY_KEY
