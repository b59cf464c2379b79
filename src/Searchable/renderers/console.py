"""Console text output for search results."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from Searchable.renderers.base import OutputWriter, SearchResult
from Searchable.utils.log import log


def render_text(rows: Sequence[Mapping[str, Any]], relevance_field: str = "relevance") -> str:
    """Render result rows as numbered ``column=value`` lines.

    The relevance column, when present, is shown first.
    """
    lines: list[str] = []
    for idx, row in enumerate(rows, start=1):
        head = f"{idx}."
        if relevance_field in row:
            head += f" [{row[relevance_field]}]"
        lines.append(head)
        for column, value in row.items():
            if column == relevance_field:
                continue
            lines.append(f"   {column}: {value}")
    if not lines:
        return "(no results)\n"
    return "\n".join(lines) + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def __init__(self, relevance_field: str = "relevance") -> None:
        self.relevance_field = relevance_field

    def write_result(self, result: SearchResult) -> None:
        log.info("%s: %d of %d rows for %r", result.entity, len(result.rows), result.total, result.phrase)
        for line in render_text(result.rows, self.relevance_field).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
