"""Storage layer for Searchable.

Provides the SQLite connection manager used to execute search queries.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from Searchable.storage.db import DatabaseManager
from Searchable.utils.log import log

if TYPE_CHECKING:
    from Searchable.config import AppConfig


def create_storage(config: AppConfig, connection: str | None = None) -> DatabaseManager:
    """Create the database manager for a configured connection.

    Args:
        config: Application configuration.
        connection: Connection name, ``None`` for the default connection.

    Returns:
        DatabaseManager for the connection's SQLite file.

    Raises:
        ValueError: If the connection has no ``path``.
    """
    conn_config = config.database.connection(connection)
    if not conn_config.path:
        raise ValueError(f"database.connections.{conn_config.name}.path is required to execute queries")
    db_path = Path(conn_config.path)
    log.info("Database: %s (%s)", db_path, conn_config.driver)
    return DatabaseManager(db_path)


__all__ = [
    "DatabaseManager",
    "create_storage",
]
