"""Logging settings (``log`` section).

The section is optional; without it the CLI logs INFO to the console only.

Example::

    log:
      level: DEBUG     # DEBUG shows the generated SQL and bindings
      to_file: true    # mirror every record to <dir>/<command>/<command>_<ts>.log
      dir: log
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from Searchable.config.common import (
    expect_bool,
    expect_str,
    get_optional_value,
    get_section,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    level: str = "INFO"
    to_file: bool = False
    dir: str = "log"


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    section = get_section(raw, "log", required=False)
    defaults = RuntimeConfig()
    return RuntimeConfig(
        level=expect_str(get_optional_value(section, "level", defaults.level), "log.level").upper(),
        to_file=expect_bool(get_optional_value(section, "to_file", defaults.to_file), "log.to_file"),
        dir=expect_str(get_optional_value(section, "dir", defaults.dir), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    if config.level not in _LOG_LEVELS:
        raise ValueError(f"log.level must be one of {list(_LOG_LEVELS)}, got {config.level!r}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is enabled")
