"""Dialect registry keyed by connection driver name."""

from __future__ import annotations

from collections.abc import Callable

from Searchable.core.errors import ConfigurationError
from Searchable.dialects.base import Dialect

DialectBuilder = Callable[[], Dialect]


def get_dialect(driver: str) -> Dialect:
    """Return the dialect policy for a connection driver.

    Args:
        driver: Driver identifier from ``database.connections.<name>.driver``.
            Both the short driver names (mysql, pgsql, sqlsrv, sqlite) and the
            dialect names (standard, postgres, sqlserver) are accepted.

    Returns:
        Dialect policy instance.

    Raises:
        ConfigurationError: If no policy is registered for ``driver``.
    """
    key = (driver or "").strip().lower()
    builder = _dialect_builders().get(_DRIVER_ALIASES.get(key, key))
    if builder is None:
        raise ConfigurationError(f"Unsupported database driver: {driver!r}")
    return builder()


def supported_driver_names() -> tuple[str, ...]:
    """Return every driver name accepted by ``get_dialect``."""
    return tuple(_dialect_builders().keys()) + tuple(_DRIVER_ALIASES.keys())


_DRIVER_ALIASES: dict[str, str] = {
    "mysql": "standard",
    "mariadb": "standard",
    "pgsql": "postgres",
    "postgresql": "postgres",
    "sqlsrv": "sqlserver",
    "mssql": "sqlserver",
}


def _dialect_builders() -> dict[str, DialectBuilder]:
    """Return dialect builder registry."""
    from Searchable.dialects.postgres import PostgresDialect
    from Searchable.dialects.sqlite import SqliteDialect
    from Searchable.dialects.sqlserver import SqlServerDialect
    from Searchable.dialects.standard import StandardDialect

    return {
        "standard": StandardDialect,
        "postgres": PostgresDialect,
        "sqlserver": SqlServerDialect,
        "sqlite": SqliteDialect,
    }
