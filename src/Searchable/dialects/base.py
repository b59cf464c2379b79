"""Dialect policy interface.

Every SQL backend family differs in how the relevance query must be written:
the case-insensitive comparison operator, identifier quoting, whether HAVING
may name the relevance alias, how complete GROUP BY must be, and whether the
composed query must be wrapped in a derived table before it is handed back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class HavingReference(Enum):
    """What the HAVING predicate compares against the threshold."""

    ALIAS = "alias"
    EXPRESSION = "expression"


class GroupByStrategy(Enum):
    """How the GROUP BY list is inferred when none is configured."""

    PRIMARY_KEY = "primary_key"
    ALL_COLUMNS = "all_columns"


class Dialect(ABC):
    """Per-backend rules used by the relevance compiler."""

    name: str = ""

    @abstractmethod
    def like_operator(self) -> str:
        """Return the pattern-match operator used for prefix/substring tiers."""

    @abstractmethod
    def quote_identifier(self, column: str) -> str:
        """Quote a possibly dotted identifier (``table.column``)."""

    @abstractmethod
    def aggregate_reference_in_having(self) -> HavingReference:
        """Return whether HAVING names the alias or repeats the expression."""

    @abstractmethod
    def group_by_strategy(self) -> GroupByStrategy:
        """Return the GROUP BY inference strategy."""

    def binding_duplication_factor(self) -> int:
        """Return how many times the relevance bindings are bound.

        Once when HAVING reuses the alias, twice when the expression is
        repeated in HAVING (SELECT bindings first, then HAVING bindings).
        """
        if self.aggregate_reference_in_having() is HavingReference.ALIAS:
            return 1
        return 2

    def requires_derived_table(self) -> bool:
        """Return whether the composed query is wrapped as ``SELECT * FROM (...)``."""
        return self.aggregate_reference_in_having() is HavingReference.EXPRESSION

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


def split_identifier(column: str) -> list[str]:
    """Split a dotted identifier into its parts."""
    return column.split(".")
