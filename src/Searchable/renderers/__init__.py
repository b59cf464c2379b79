"""Output renderers for search results.

Exports the OutputWriter base class and a factory building writers from the
configured output formats.
"""

from __future__ import annotations

from Searchable.config import AppConfig
from Searchable.renderers.base import MultiOutputWriter, OutputWriter, SearchResult
from Searchable.renderers.console import ConsoleOutputWriter, render_text
from Searchable.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig, relevance_field: str = "relevance") -> OutputWriter:
    """Create output writer based on config.

    Raises:
        ValueError: If no writer is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter(relevance_field))
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "SearchResult",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
