"""Click CLI interface definitions."""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from Searchable.cli.commands import SearchOptions
from Searchable.cli.runner import CommandRunner
from Searchable.config import load_config


def _search_options(func):
    """Attach the options shared by ``sql`` and ``search``."""
    func = click.option("--entire-text-only", is_flag=True, help="Score only the whole phrase.")(func)
    func = click.option("--entire-text", is_flag=True, help="Also score the whole phrase.")(func)
    func = click.option("--threshold", type=float, default=None, help="Minimum relevance (default: average weight).")(func)
    func = click.argument("phrase")(func)
    func = click.argument("entity")(func)
    return func


@click.group(help="Searchable: relevance search over SQL tables without a full-text index.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("sql")
@_search_options
@click.pass_context
def sql_cmd(
    ctx: click.Context,
    entity: str,
    phrase: str,
    threshold: float | None,
    entire_text: bool,
    entire_text_only: bool,
) -> None:
    """Print the SQL and bindings generated for a search."""
    options = SearchOptions(phrase, threshold, entire_text, entire_text_only)
    CommandRunner(ctx.obj).run_sql(ctx.command.name, entity, options)


@cli.command("search")
@_search_options
@click.option("--limit", type=int, default=None, help="Maximum rows to return.")
@click.option("--offset", type=int, default=None, help="Rows to skip.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    entity: str,
    phrase: str,
    threshold: float | None,
    entire_text: bool,
    entire_text_only: bool,
    limit: int | None,
    offset: int | None,
) -> None:
    """Search an entity and write matching rows, best first."""
    if offset is not None and limit is None:
        raise click.UsageError("--offset requires --limit")
    options = SearchOptions(phrase, threshold, entire_text, entire_text_only)
    CommandRunner(ctx.obj).run_search(ctx.command.name, entity, options, limit=limit, offset=offset)
