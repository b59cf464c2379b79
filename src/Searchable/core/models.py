from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from Searchable.core.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class JoinSpec:
    """Auxiliary table left-joined before relevance is computed.

    Attributes:
        table: Joined table name.
        first: Left side of the ON equality (e.g. ``users.id``).
        second: Right side of the ON equality (e.g. ``posts.user_id``).
        where: Optional ``(column, literal)`` extra equality constraint.
    """

    table: str
    first: str
    second: str
    where: tuple[str, Any] | None = None

    def __post_init__(self) -> None:
        if not self.table or not self.first or not self.second:
            raise ConfigurationError("join requires table, first and second keys")
        if self.where is not None:
            if len(self.where) != 2:
                raise ConfigurationError(f"join {self.table}: where must be a (column, literal) pair")
            object.__setattr__(self, "where", tuple(self.where))


@dataclass(frozen=True, slots=True)
class SearchSpec:
    """Searchable definition of one entity.

    Attributes:
        columns: Ordered column -> weight mapping. ``None`` means the columns
            are discovered through schema introspection at search time.
        joins: Tables left-joined before scoring.
        group_by: Explicit GROUP BY list overriding the dialect strategy.
        table_columns: Every column of the primary table, required by
            dialects that group by all selected columns.
        relevance_field: Alias of the computed relevance column.
    """

    columns: Mapping[str, float] | None = None
    joins: Sequence[JoinSpec] = ()
    group_by: Sequence[str] | None = None
    table_columns: Sequence[str] | None = None
    relevance_field: str = "relevance"

    def __post_init__(self) -> None:
        if self.columns is not None:
            object.__setattr__(self, "columns", MappingProxyType(validate_columns(self.columns)))
        object.__setattr__(self, "joins", tuple(self.joins))
        if self.group_by is not None:
            object.__setattr__(self, "group_by", tuple(self.group_by))
        if self.table_columns is not None:
            object.__setattr__(self, "table_columns", tuple(self.table_columns))
        if not self.relevance_field or not self.relevance_field.strip():
            raise ConfigurationError("relevance_field must not be empty")


def validate_columns(columns: Mapping[str, Any]) -> dict[str, float]:
    """Validate a column -> weight mapping.

    Args:
        columns: Raw mapping.

    Returns:
        A plain dict copy in the original order.

    Raises:
        ConfigurationError: If the mapping is empty or a weight is not a
            positive number.
    """
    if not columns:
        raise ConfigurationError("searchable columns must include at least one column")
    out: dict[str, float] = {}
    for column, weight in columns.items():
        if not isinstance(column, str) or not column.strip():
            raise ConfigurationError(f"searchable column names must be non-empty strings: {column!r}")
        if isinstance(weight, bool) or not isinstance(weight, Real):
            raise ConfigurationError(f"weight for {column} must be a number")
        if not math.isfinite(weight) or weight <= 0:
            raise ConfigurationError(f"weight for {column} must be a finite positive number")
        out[column] = weight
    return out


@dataclass(frozen=True, slots=True)
class Expression:
    """SQL fragment plus the values bound to its ``?`` placeholders, left to right."""

    sql: str
    bindings: tuple[Any, ...] = field(default=())

    @classmethod
    def sum(cls, expressions: Sequence[Expression]) -> Expression:
        """Join expressions with ``+`` keeping binding order."""
        return cls(
            " + ".join(e.sql for e in expressions),
            tuple(b for e in expressions for b in e.bindings),
        )

    def wrap(self, template: str) -> Expression:
        """Return ``template`` with ``{}`` replaced by this fragment."""
        return Expression(template.format(self.sql), self.bindings)
