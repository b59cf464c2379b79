"""Command implementations for the Searchable CLI.

Business logic of the ``sql`` and ``search`` commands, separated from click
parameter handling.
"""

from __future__ import annotations

from dataclasses import dataclass

import click

from Searchable.renderers import OutputWriter, SearchResult
from Searchable.services.searchable import SearchableModel
from Searchable.storage.db import DatabaseManager
from Searchable.utils.log import log


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Search parameters shared by the CLI commands."""

    phrase: str
    threshold: float | None = None
    entire_text: bool = False
    entire_text_only: bool = False


@dataclass(slots=True)
class SqlCommand:
    """Print the SQL and bindings of a search without executing it."""

    model: SearchableModel
    options: SearchOptions

    def execute(self) -> None:
        query = self.model.search(
            self.model.new_query(),
            self.options.phrase,
            threshold=self.options.threshold,
            entire_text=self.options.entire_text,
            entire_text_only=self.options.entire_text_only,
        )
        click.echo(query.to_sql())
        click.echo(f"bindings: {query.get_bindings()!r}")


@dataclass(slots=True)
class SearchCommand:
    """Run a search against the configured database and write the rows."""

    model: SearchableModel
    db_manager: DatabaseManager
    output_writer: OutputWriter
    options: SearchOptions
    limit: int | None = None
    offset: int | None = None

    def execute(self) -> None:
        query = self.model.search(
            self.model.new_query(),
            self.options.phrase,
            threshold=self.options.threshold,
            entire_text=self.options.entire_text,
            entire_text_only=self.options.entire_text_only,
        )
        total = self.db_manager.count(query)
        query.limit(self.limit).offset(self.offset)
        rows = [dict(row) for row in self.db_manager.fetch_all(query)]
        log.info("Found %d matching rows", total)
        self.output_writer.write_result(
            SearchResult(
                entity=self.model.entity.name,
                phrase=self.options.phrase,
                rows=rows,
                total=total,
            )
        )
