"""Minimal positional-binding SQL query builder.

Implements the query-object contract the relevance composer decorates:
clone, select, left join, raw select, where, group by, having, order by,
limit/offset, derived-table rebasing and SQL/bindings rendering.

Bindings are kept per clause kind and flattened in clause order, so the
binding list always lines up with the ``?`` placeholders of ``to_sql()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

BINDING_KINDS: tuple[str, ...] = ("select", "from", "join", "where", "having")
_DIRECTIONS = {"asc", "desc"}


def _empty_bindings() -> dict[str, list[Any]]:
    return {kind: [] for kind in BINDING_KINDS}


@dataclass(slots=True)
class Query:
    """Mutable SELECT statement over one table or derived table."""

    table: str
    columns: list[str] = field(default_factory=list)
    from_sql: str | None = None
    joins: list[str] = field(default_factory=list)
    wheres: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    havings: list[str] = field(default_factory=list)
    orders: list[str] = field(default_factory=list)
    limit_value: int | None = None
    offset_value: int | None = None
    bindings: dict[str, list[Any]] = field(default_factory=_empty_bindings)

    def copy(self) -> Query:
        """Return an independent clone of this query."""
        return Query(
            table=self.table,
            columns=list(self.columns),
            from_sql=self.from_sql,
            joins=list(self.joins),
            wheres=list(self.wheres),
            groups=list(self.groups),
            havings=list(self.havings),
            orders=list(self.orders),
            limit_value=self.limit_value,
            offset_value=self.offset_value,
            bindings={kind: list(values) for kind, values in self.bindings.items()},
        )

    def assign(self, other: Query) -> Query:
        """Replace this query's whole state with ``other``'s, keeping identity."""
        clone = other.copy()
        for name in Query.__slots__:
            setattr(self, name, getattr(clone, name))
        return self

    def select(self, *columns: str) -> Query:
        """Replace the select list."""
        self.columns = list(columns)
        self.bindings["select"] = []
        return self

    def add_select_raw(self, sql: str, bindings: Sequence[Any] = ()) -> Query:
        """Append a raw computed column with its bindings."""
        self.columns.append(sql)
        self.bindings["select"].extend(bindings)
        return self

    def left_join(self, table: str, first: str, second: str, where: tuple[str, Any] | None = None) -> Query:
        """Left join ``table`` on ``first = second`` plus an optional ``column = literal``."""
        clause = f"left join {table} on {first} = {second}"
        if where is not None:
            column, value = where
            clause += f" and {column} = ?"
            self.bindings["join"].append(value)
        self.joins.append(clause)
        return self

    def where(self, column: str, operator: str, value: Any) -> Query:
        self.wheres.append(f"{column} {operator} ?")
        self.bindings["where"].append(value)
        return self

    def where_raw(self, sql: str, bindings: Sequence[Any] = ()) -> Query:
        self.wheres.append(sql)
        self.bindings["where"].extend(bindings)
        return self

    def group_by(self, *columns: str | Iterable[str]) -> Query:
        """Append GROUP BY columns, skipping ones already present."""
        for column in _flatten(columns):
            if column not in self.groups:
                self.groups.append(column)
        return self

    def having_raw(self, sql: str, bindings: Sequence[Any] = ()) -> Query:
        self.havings.append(sql)
        self.bindings["having"].extend(bindings)
        return self

    def order_by(self, column: str, direction: str = "asc") -> Query:
        direction = direction.lower()
        if direction not in _DIRECTIONS:
            raise ValueError(f"Order direction must be 'asc' or 'desc': {direction}")
        self.orders.append(f"{column} {direction}")
        return self

    def limit(self, value: int | None) -> Query:
        self.limit_value = value
        return self

    def offset(self, value: int | None) -> Query:
        self.offset_value = value
        return self

    def from_subquery(self, subquery: Query, alias: str) -> Query:
        """Rebase this query on ``(<subquery>) as <alias>``.

        Every clause already on this query is dropped: the subquery is
        expected to carry it. Only the object identity survives.
        """
        sql = subquery.to_sql()
        bindings = subquery.get_bindings()
        self.columns = []
        self.joins = []
        self.wheres = []
        self.groups = []
        self.havings = []
        self.orders = []
        self.limit_value = None
        self.offset_value = None
        self.bindings = _empty_bindings()
        self.from_sql = f"({sql}) as {alias}"
        self.bindings["from"] = list(bindings)
        return self

    def add_binding(self, value: Any, kind: str = "where") -> Query:
        self._check_kind(kind)
        self.bindings[kind].append(value)
        return self

    def set_bindings(self, values: Sequence[Any], kind: str = "where") -> Query:
        self._check_kind(kind)
        self.bindings[kind] = list(values)
        return self

    def get_bindings(self) -> list[Any]:
        """Return all bindings flattened in placeholder order."""
        return [value for kind in BINDING_KINDS for value in self.bindings[kind]]

    def to_sql(self) -> str:
        """Render the statement with ``?`` placeholders."""
        parts = [f"select {', '.join(self.columns) if self.columns else '*'}"]
        parts.append(f"from {self.from_sql or self.table}")
        parts.extend(self.joins)
        if self.wheres:
            parts.append("where " + " and ".join(self.wheres))
        if self.groups:
            parts.append("group by " + ", ".join(self.groups))
        if self.havings:
            parts.append("having " + " and ".join(self.havings))
        if self.orders:
            parts.append("order by " + ", ".join(self.orders))
        if self.limit_value is not None:
            parts.append(f"limit {int(self.limit_value)}")
        if self.offset_value is not None:
            parts.append(f"offset {int(self.offset_value)}")
        return " ".join(parts)

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in BINDING_KINDS:
            raise ValueError(f"Unknown binding kind: {kind}")


def _flatten(columns: Iterable[str | Iterable[str]]) -> list[str]:
    out: list[str] = []
    for item in columns:
        if isinstance(item, str):
            out.append(item)
        else:
            out.extend(item)
    return out
