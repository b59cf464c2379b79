"""JSON output for search results."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping

from Searchable.renderers.base import OutputWriter, SearchResult
from Searchable.utils.log import log


def render_json(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Convert result rows into plain dicts."""
    return [dict(row) for row in rows]


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict[str, Any]] = []

    def write_result(self, result: SearchResult) -> None:
        self.all_results.append(
            {
                "entity": result.entity,
                "phrase": result.phrase,
                "total": result.total,
                "rows": render_json(result.rows),
            }
        )

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<timestamp>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2, default=str)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
