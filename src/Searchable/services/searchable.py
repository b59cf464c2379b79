"""Searchable entity service.

Binds one configured entity to its connection: resolves the dialect and the
table prefix on every call, discovers columns through schema introspection
when the entity does not list them, and delegates to ``QueryComposer``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from Searchable.compiler.composer import QueryComposer, Restriction
from Searchable.config.database import ConnectionConfig, DatabaseConfig
from Searchable.config.entities import EntityConfig
from Searchable.core.errors import ConfigurationError
from Searchable.core.models import JoinSpec, SearchSpec
from Searchable.dialects.base import GroupByStrategy
from Searchable.query.builder import Query
from Searchable.utils.log import log

ColumnLister = Callable[[str], Sequence[str]]

INTROSPECTED_WEIGHT = 1.0


def apply_prefix(reference: str, prefix: str) -> str:
    """Prefix the table part of a ``table.column`` reference.

    Bare column names are returned unchanged.
    """
    if not prefix or "." not in reference:
        return reference
    table, column = reference.split(".", 1)
    return f"{prefix}{table}.{column}"


def prefixed_spec(spec: SearchSpec, prefix: str) -> SearchSpec:
    """Return ``spec`` with ``prefix`` applied to every table reference."""
    if not prefix:
        return spec
    joins = tuple(
        JoinSpec(
            table=f"{prefix}{join.table}",
            first=apply_prefix(join.first, prefix),
            second=apply_prefix(join.second, prefix),
            where=(apply_prefix(join.where[0], prefix), join.where[1]) if join.where else None,
        )
        for join in spec.joins
    )
    return SearchSpec(
        columns=(
            {apply_prefix(column, prefix): weight for column, weight in spec.columns.items()}
            if spec.columns is not None
            else None
        ),
        joins=joins,
        group_by=[apply_prefix(c, prefix) for c in spec.group_by] if spec.group_by is not None else None,
        table_columns=(
            [apply_prefix(c, prefix) for c in spec.table_columns] if spec.table_columns is not None else None
        ),
        relevance_field=spec.relevance_field,
    )


@dataclass(slots=True)
class SearchableModel:
    """Relevance search over one configured entity.

    Attributes:
        entity: Entity definition.
        database: Database configuration used to resolve the connection.
        list_columns: Schema introspection callback returning a table's
            column names. Only called when the entity has no column map,
            or when the dialect needs every table column for GROUP BY.
    """

    entity: EntityConfig
    database: DatabaseConfig
    list_columns: ColumnLister | None = None

    def connection(self) -> ConnectionConfig:
        return self.database.connection(self.entity.connection)

    def table_name(self, connection: ConnectionConfig | None = None) -> str:
        """Return the prefixed table name."""
        connection = connection or self.connection()
        return f"{connection.prefix}{self.entity.table}"

    def new_query(self) -> Query:
        """Return ``select * from <table>`` for this entity."""
        return Query(self.table_name())

    def search(
        self,
        query: Query,
        phrase: str | None,
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
    ) -> Query:
        """Decorate ``query`` with relevance search for ``phrase``.

        Returns:
            The same ``query`` object.
        """
        return self.search_restricted(query, phrase, None, threshold, entire_text, entire_text_only)

    def search_restricted(
        self,
        query: Query,
        phrase: str | None,
        restriction: Restriction | None,
        threshold: float | None = None,
        entire_text: bool = False,
        entire_text_only: bool = False,
    ) -> Query:
        """Like ``search`` with a callback that can restrict the composed query."""
        composer = self.composer()
        log.debug(
            "Searching %s (dialect=%s) phrase=%r threshold=%s",
            composer.table,
            composer.dialect.name,
            phrase,
            threshold,
        )
        return composer.build(
            query,
            phrase,
            threshold=threshold,
            entire_text=entire_text,
            entire_text_only=entire_text_only,
            restriction=restriction,
        )

    def composer(self) -> QueryComposer:
        """Build a composer for the entity's current connection."""
        connection = self.connection()
        dialect = connection.dialect
        table = self.table_name(connection)
        spec = prefixed_spec(self.entity.spec, connection.prefix)

        columns = spec.columns
        if columns is None:
            columns = {
                f"{table}.{name}": INTROSPECTED_WEIGHT for name in self._introspect(table)
            }

        table_columns = spec.table_columns
        if (
            table_columns is None
            and spec.group_by is None
            and dialect.group_by_strategy() is GroupByStrategy.ALL_COLUMNS
        ):
            table_columns = tuple(f"{table}.{name}" for name in self._introspect(table))

        return QueryComposer(
            dialect,
            table=table,
            primary_key=self.entity.primary_key,
            spec=spec,
            columns=columns,
            table_columns=table_columns,
        )

    def _introspect(self, table: str) -> Sequence[str]:
        if self.list_columns is None:
            raise ConfigurationError(
                f"searchable.{self.entity.name} lists no columns and no schema introspection is available"
            )
        names = list(self.list_columns(table))
        log.debug("Introspected %d columns for %s", len(names), table)
        return names
