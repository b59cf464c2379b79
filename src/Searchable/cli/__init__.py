"""CLI package for Searchable command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from Searchable.cli.runner import CommandRunner
from Searchable.cli.ui import cli


def main() -> None:
    """Run the Searchable CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
