"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation, database cleanup and
error handling for command execution.
"""

from __future__ import annotations

from contextlib import ExitStack

import click

from Searchable.cli.commands import SearchCommand, SearchOptions, SqlCommand
from Searchable.config import AppConfig
from Searchable.renderers import create_output_writer
from Searchable.services import create_searchable
from Searchable.storage import create_storage
from Searchable.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(self.config.runtime, action)

    def run_sql(self, action: str, entity: str, options: SearchOptions) -> None:
        """Print the generated SQL for a search.

        The database is only opened when the connection has a path, so that
        entities without a column map can be introspected.

        Raises:
            click.Abort: When the query cannot be built.
        """
        self._configure_logging(action)
        try:
            entity_config = self.config.entity(entity)
            connection = self.config.database.connection(entity_config.connection)
            with ExitStack() as stack:
                list_columns = None
                if connection.path:
                    db_manager = stack.enter_context(create_storage(self.config, connection.name))
                    list_columns = db_manager.list_columns
                model = create_searchable(self.config, entity, list_columns=list_columns)
                SqlCommand(model=model, options=options).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("SQL generation failed: %s", e)
            raise click.Abort from e

    def run_search(
        self,
        action: str,
        entity: str,
        options: SearchOptions,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> None:
        """Execute a search and write its rows.

        Raises:
            click.Abort: When the search fails.
        """
        self._configure_logging(action)
        try:
            entity_config = self.config.entity(entity)
            output_writer = create_output_writer(self.config, entity_config.spec.relevance_field)
            with create_storage(self.config, entity_config.connection) as db_manager:
                model = create_searchable(self.config, entity, list_columns=db_manager.list_columns)
                command = SearchCommand(
                    model=model,
                    db_manager=db_manager,
                    output_writer=output_writer,
                    options=options,
                    limit=limit,
                    offset=offset,
                )
                command.execute()
                output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
