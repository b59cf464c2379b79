from __future__ import annotations

"""Public configuration API for Searchable."""

from Searchable.config.app import (
    AppConfig,
    check_cross_domain,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from Searchable.config.database import ConnectionConfig, DatabaseConfig
from Searchable.config.entities import EntityConfig
from Searchable.config.output import OutputConfig
from Searchable.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "DatabaseConfig",
    "ConnectionConfig",
    "EntityConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "check_cross_domain",
]
