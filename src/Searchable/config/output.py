"""Output domain configuration for search result rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from Searchable.config.common import (
    expect_str,
    expect_str_list,
    get_optional_value,
    get_section,
)

_ALLOWED_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration."""

    base_dir: str
    formats: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load the optional ``output`` section (console only when absent)."""
    section = get_section(raw, "output", required=False)
    formats = expect_str_list(get_optional_value(section, "formats", ["console"]), "output.formats")
    return OutputConfig(
        base_dir=expect_str(get_optional_value(section, "base_dir", "output"), "output.base_dir"),
        formats=tuple(item.lower() for item in formats),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints."""
    if not config.base_dir.strip():
        raise ValueError("output.base_dir must not be empty")
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = set(config.formats) - _ALLOWED_FORMATS
    if unknown:
        raise ValueError(f"output.formats has unknown formats: {sorted(unknown)}")
