"""Database domain configuration: connections, drivers and table prefixes."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from Searchable.config.common import (
    expect_mapping,
    expect_optional_str,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)
from Searchable.core.errors import ConfigurationError
from Searchable.dialects import Dialect, get_dialect


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    """One named database connection.

    Attributes:
        name: Connection name.
        driver: Driver identifier selecting the SQL dialect.
        prefix: Table name prefix applied to every table of the connection.
        path: SQLite database file used when queries are executed locally.
    """

    name: str
    driver: str
    prefix: str = ""
    path: str | None = None

    @property
    def dialect(self) -> Dialect:
        return get_dialect(self.driver)


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Database configuration."""

    default: str
    connections: Mapping[str, ConnectionConfig]

    def connection(self, name: str | None = None) -> ConnectionConfig:
        """Return the named connection, or the default one.

        Raises:
            ConfigurationError: If the connection is not configured.
        """
        key = name or self.default
        try:
            return self.connections[key]
        except KeyError:
            raise ConfigurationError(f"Unknown database connection: {key}") from None


def load_database(raw: Mapping[str, Any]) -> DatabaseConfig:
    """Load the ``database`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "database", required=True)
    default = expect_str(get_required_value(section, "default", "database.default"), "database.default")
    connections_obj = expect_mapping(
        get_required_value(section, "connections", "database.connections"), "database.connections"
    )

    connections: dict[str, ConnectionConfig] = {}
    for name, value in connections_obj.items():
        key = f"database.connections.{name}"
        entry = expect_mapping(value, key)
        connections[name] = ConnectionConfig(
            name=name,
            driver=expect_str(get_required_value(entry, "driver", f"{key}.driver"), f"{key}.driver"),
            prefix=expect_str(get_optional_value(entry, "prefix", ""), f"{key}.prefix"),
            path=expect_optional_str(entry.get("path"), f"{key}.path"),
        )
    return DatabaseConfig(default=default, connections=MappingProxyType(connections))


def check_database(config: DatabaseConfig) -> None:
    """Validate database domain constraints.

    Raises:
        ValueError: If the default connection is missing or a driver is unknown.
    """
    if not config.connections:
        raise ValueError("database.connections must include at least one connection")
    if config.default not in config.connections:
        raise ValueError(f"database.default refers to unknown connection: {config.default}")
    for name, connection in config.connections.items():
        try:
            get_dialect(connection.driver)
        except ConfigurationError as e:
            raise ValueError(f"database.connections.{name}.driver: {e}") from e
