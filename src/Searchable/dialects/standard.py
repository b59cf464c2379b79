"""MySQL-like dialect."""

from __future__ import annotations

from Searchable.dialects.base import Dialect, GroupByStrategy, HavingReference, split_identifier


class StandardDialect(Dialect):
    """MySQL-like backend.

    HAVING may name the select alias, so relevance bindings are bound once
    and the composed query is merged back without a derived-table wrap.
    """

    name = "standard"

    def like_operator(self) -> str:
        return "LIKE"

    def quote_identifier(self, column: str) -> str:
        return ".".join(f"`{part}`" for part in split_identifier(column))

    def aggregate_reference_in_having(self) -> HavingReference:
        return HavingReference.ALIAS

    def group_by_strategy(self) -> GroupByStrategy:
        return GroupByStrategy.PRIMARY_KEY
