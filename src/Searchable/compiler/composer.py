"""Relevance query composer.

Decorates a caller-owned base query with a relevance score:

1. clone the base query and select the primary table's columns,
2. left join the auxiliary tables,
3. build one relevance expression per searchable column,
4. select ``max(<sum of expressions>) as <relevance_field>``,
5. keep rows whose relevance reaches the threshold, best first,
6. group rows back to one per primary key,
7. merge the result into the caller's handle, wrapped in a derived table
   for dialects that repeat the relevance expression in HAVING.

All state lives in locals of one ``build`` call; a composer can be reused
and shared between callers.
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

from Searchable.compiler.relevance import build_column_expression
from Searchable.core.errors import ConfigurationError
from Searchable.core.models import Expression, SearchSpec, validate_columns
from Searchable.core.tokenizer import normalize_phrase, tokenize
from Searchable.dialects.base import Dialect, GroupByStrategy, HavingReference
from Searchable.query.builder import Query
from Searchable.utils.log import log

Restriction = Callable[[Query], "Query | None"]


def default_threshold(columns: Mapping[str, float]) -> float:
    """Return the average column weight."""
    if not columns:
        return 0.0
    return sum(columns.values()) / len(columns)


def format_threshold(value: float) -> str:
    """Render a threshold with two decimals so generated SQL stays stable."""
    return f"{float(value):.2f}"


class QueryComposer:
    """Compose relevance search queries for one table in one dialect.

    Args:
        dialect: Dialect policy of the connection the query runs on.
        table: Primary table name (already prefixed).
        primary_key: Primary key column of ``table``.
        spec: Searchable definition; joins, grouping and relevance alias.
        columns: Resolved column -> weight mapping. Defaults to ``spec.columns``.
        table_columns: Resolved primary table columns for dialects grouping by
            every column. Defaults to ``spec.table_columns``.
        alias: Derived-table alias. Defaults to ``table``.
    """

    def __init__(
        self,
        dialect: Dialect,
        *,
        table: str,
        primary_key: str,
        spec: SearchSpec,
        columns: Mapping[str, float] | None = None,
        table_columns: Sequence[str] | None = None,
        alias: str | None = None,
    ) -> None:
        self.dialect = dialect
        self.table = table
        self.primary_key = primary_key
        self.spec = spec
        resolved = columns if columns is not None else spec.columns
        self.columns: Mapping[str, float] = validate_columns(resolved) if resolved else {}
        self.table_columns = tuple(table_columns if table_columns is not None else spec.table_columns or ())
        self.alias = alias or table

    def build(
        self,
        query: Query,
        phrase: str | None,
        *,
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
        restriction: Restriction | None = None,
    ) -> Query:
        """Decorate ``query`` with relevance scoring and filtering.

        Args:
            query: Caller's base query. It is mutated and returned.
            phrase: Raw search phrase.
            threshold: Minimum relevance. Defaults to the average weight.
            entire_text: Also score the whole phrase when it has several words.
            entire_text_only: Score only the whole phrase.
            restriction: Callback receiving the composed query before it is
                merged; it may add predicates and return a replacement query.

        Returns:
            The same ``query`` object.
        """
        working = query.copy()
        working.select(f"{self.table}.*")
        self._apply_joins(working)

        search = normalize_phrase(phrase)
        if not search:
            log.debug("Empty search phrase for %s; returning unfiltered query", self.table)
            return query.assign(working)

        words = tokenize(search)
        if not words and not entire_text_only:
            log.debug("Search phrase %r has no words for %s; returning unfiltered query", search, self.table)
            return query.assign(working)
        log.debug("Search words for %s: %s", self.table, words)

        selects: list[Expression] = []
        for column, weight in self.columns.items():
            expression = build_column_expression(
                self.dialect,
                column,
                weight,
                words,
                phrase=search,
                entire_text=entire_text,
                entire_text_only=entire_text_only,
            )
            if expression is not None:
                selects.append(expression)

        if selects:
            self._apply_relevance(working, Expression.sum(selects), threshold)
        else:
            log.debug("No relevance terms for %s; skipping relevance filter", self.table)

        self._apply_group_by(working)

        if restriction is not None:
            restricted = restriction(working)
            if restricted is not None:
                working = restricted

        return self._merge(working, query)

    def resolve_threshold(self, threshold: float | None) -> str:
        """Return the formatted threshold, defaulting to the average weight."""
        if threshold is None:
            threshold = default_threshold(self.columns)
        return format_threshold(threshold)

    def _apply_joins(self, query: Query) -> None:
        for join in self.spec.joins:
            query.left_join(join.table, join.first, join.second, join.where)

    def _apply_relevance(self, query: Query, total: Expression, threshold: float | None) -> None:
        field = self.spec.relevance_field
        relevance = total.wrap("max({})")
        query.add_select_raw(f"{relevance.sql} as {field}", relevance.bindings)

        if self.dialect.aggregate_reference_in_having() is HavingReference.ALIAS:
            comparator = Expression(field)
        else:
            comparator = relevance
        repeats = self.dialect.binding_duplication_factor() - 1
        resolved = self.resolve_threshold(threshold)
        query.having_raw(f"{comparator.sql} >= {resolved}", relevance.bindings * repeats)
        query.order_by(field, "desc")
        log.debug(
            "Relevance filter for %s: threshold=%s bindings=%d x%d",
            self.table,
            resolved,
            len(relevance.bindings),
            repeats + 1,
        )

    def _apply_group_by(self, query: Query) -> None:
        if self.spec.group_by:
            query.group_by(self.spec.group_by)
            return

        query.group_by(f"{self.table}.{self.primary_key}")
        if self.dialect.group_by_strategy() is GroupByStrategy.ALL_COLUMNS:
            if not self.table_columns:
                raise ConfigurationError(
                    f"{self.dialect.name} dialect groups by every column; table_columns is required for {self.table}"
                )
            query.group_by(self.table_columns)

        join_tables = [join.table for join in self.spec.joins]
        for column in self.columns:
            if any(join_table in column for join_table in join_tables):
                query.group_by(column)

    def _merge(self, working: Query, original: Query) -> Query:
        if not self.dialect.requires_derived_table():
            return original.assign(working)

        orders = working.orders
        limit, offset = working.limit_value, working.offset_value
        working.orders = []
        working.limit_value = None
        working.offset_value = None

        original.from_subquery(working, self.dialect.quote_identifier(self.alias))
        original.orders = orders
        original.limit_value = limit
        original.offset_value = offset
        log.debug("Wrapped %s search in derived table with %d bindings", self.table, len(original.get_bindings()))
        return original
