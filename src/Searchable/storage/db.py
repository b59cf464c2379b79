"""SQLite database utilities.

Executes composed search queries and provides schema introspection for
entities that do not list their searchable columns.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from Searchable.query.builder import Query
from Searchable.query.count import count_query
from Searchable.utils.log import log


class DatabaseManager:
    """Shared database connection manager.

    One instance (and one connection) is kept per database path; asking for
    the same path again returns the existing manager.

    Supports context manager protocol for automatic connection cleanup.
    """

    _instances: dict[Path, DatabaseManager] = {}

    def __new__(cls, db_path: Path):
        """Create or return the manager for ``db_path``.

        Args:
            db_path: Absolute path or project-relative path to database file.

        Returns:
            DatabaseManager instance bound to that path.
        """
        key = Path(db_path).resolve()
        instance = cls._instances.get(key)
        if instance is None:
            instance = super().__new__(cls)
            instance.path = key
            instance.conn = ensure_db(key)
            cls._instances[key] = instance
        return instance

    def get_connection(self) -> sqlite3.Connection:
        """Get the shared database connection."""
        return self.conn

    def fetch_all(self, query: Query) -> list[sqlite3.Row]:
        """Execute ``query`` and return every row.

        Raises:
            sqlite3.Error: If the statement fails.
        """
        sql, bindings = query.to_sql(), query.get_bindings()
        log.debug("SQL: %s bindings=%s", sql, bindings)
        return self.conn.execute(sql, bindings).fetchall()

    def count(self, query: Query) -> int:
        """Return the number of rows ``query`` yields, ignoring ordering and paging."""
        sql, bindings = count_query(query)
        row = self.conn.execute(sql, bindings).fetchone()
        return int(row[0])

    def list_columns(self, table: str) -> list[str]:
        """Return a table's column names in declaration order."""
        quoted = '"' + table.replace('"', '""') + '"'
        cursor = self.conn.execute(f"PRAGMA table_info({quoted})")
        return [row[1] for row in cursor]

    def close(self) -> None:
        """Close the connection and forget this path's manager."""
        if getattr(self, "conn", None) is not None:
            self.conn.close()
            self.conn = None
            type(self)._instances.pop(self.path, None)

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path) -> sqlite3.Connection:
    """Ensure the database directory exists and return a connection.

    Rows are returned as ``sqlite3.Row`` so they can be read by column name.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn
