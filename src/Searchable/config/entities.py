"""Searchable entity definitions.

Example::

    searchable:
      users:
        table: users
        primary_key: id
        columns:
          users.first_name: 10
          users.email: 5
          posts.title: 2
        joins:
          - table: posts
            first: users.id
            second: posts.user_id
            where: [posts.published, 1]
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from Searchable.config.common import (
    expect_mapping,
    expect_optional_str,
    expect_optional_str_list,
    expect_str,
    expect_weight,
    get_optional_value,
    get_required_value,
    get_section,
)
from Searchable.core.errors import ConfigurationError
from Searchable.core.models import JoinSpec, SearchSpec


@dataclass(frozen=True, slots=True)
class EntityConfig:
    """A table that can be searched by relevance.

    Attributes:
        name: Entity name used on the command line.
        table: Unprefixed table name.
        primary_key: Primary key column.
        connection: Connection name, ``None`` for the default connection.
        spec: Columns, joins and grouping used to score rows.
    """

    name: str
    table: str
    primary_key: str
    connection: str | None
    spec: SearchSpec


def load_entities(raw: Mapping[str, Any]) -> Mapping[str, EntityConfig]:
    """Load the ``searchable`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing or a definition is invalid.
    """
    section = get_section(raw, "searchable", required=True)
    entities: dict[str, EntityConfig] = {}
    for name, value in section.items():
        entities[name] = _parse_entity(name, expect_mapping(value, f"searchable.{name}"))
    return MappingProxyType(entities)


def check_entities(entities: Mapping[str, EntityConfig]) -> None:
    """Validate entity constraints."""
    if not entities:
        raise ValueError("searchable must include at least one entity")
    for name, entity in entities.items():
        if not entity.table.strip():
            raise ValueError(f"searchable.{name}.table must not be empty")
        if not entity.primary_key.strip():
            raise ValueError(f"searchable.{name}.primary_key must not be empty")


def _parse_entity(name: str, section: Mapping[str, Any]) -> EntityConfig:
    key = f"searchable.{name}"

    columns = None
    if "columns" in section:
        columns_obj = expect_mapping(section["columns"], f"{key}.columns")
        columns = {
            column: expect_weight(weight, f"{key}.columns.{column}") for column, weight in columns_obj.items()
        }

    joins_obj = get_optional_value(section, "joins", [])
    if not isinstance(joins_obj, list):
        raise TypeError(f"{key}.joins must be a list")
    joins = tuple(_parse_join(item, f"{key}.joins[{idx}]") for idx, item in enumerate(joins_obj))

    try:
        spec = SearchSpec(
            columns=columns,
            joins=joins,
            group_by=expect_optional_str_list(section.get("group_by"), f"{key}.group_by"),
            table_columns=expect_optional_str_list(section.get("table_columns"), f"{key}.table_columns"),
            relevance_field=expect_str(
                get_optional_value(section, "relevance_field", "relevance"), f"{key}.relevance_field"
            ),
        )
    except ConfigurationError as e:
        raise ValueError(f"{key}: {e}") from e

    return EntityConfig(
        name=name,
        table=expect_str(get_required_value(section, "table", f"{key}.table"), f"{key}.table"),
        primary_key=expect_str(get_optional_value(section, "primary_key", "id"), f"{key}.primary_key"),
        connection=expect_optional_str(section.get("connection"), f"{key}.connection"),
        spec=spec,
    )


def _parse_join(value: Any, config_key: str) -> JoinSpec:
    entry = expect_mapping(value, config_key)
    where = entry.get("where")
    if where is not None:
        if not isinstance(where, list) or len(where) != 2:
            raise TypeError(f"{config_key}.where must be a [column, value] list")
        where = (expect_str(where[0], f"{config_key}.where[0]"), where[1])
    return JoinSpec(
        table=expect_str(get_required_value(entry, "table", f"{config_key}.table"), f"{config_key}.table"),
        first=expect_str(get_required_value(entry, "first", f"{config_key}.first"), f"{config_key}.first"),
        second=expect_str(get_required_value(entry, "second", f"{config_key}.second"), f"{config_key}.second"),
        where=where,
    )
