"""Postgres-like dialect."""

from __future__ import annotations

from Searchable.dialects.base import Dialect, GroupByStrategy, HavingReference


class PostgresDialect(Dialect):
    """Postgres-like backend.

    Identifiers are left unquoted so they fold to lower case like the rest of
    the query; ILIKE gives case-insensitive pattern matching.
    """

    name = "postgres"

    def like_operator(self) -> str:
        return "ILIKE"

    def quote_identifier(self, column: str) -> str:
        return column

    def aggregate_reference_in_having(self) -> HavingReference:
        return HavingReference.EXPRESSION

    def group_by_strategy(self) -> GroupByStrategy:
        return GroupByStrategy.PRIMARY_KEY
