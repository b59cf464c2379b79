from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from Searchable.config.database import DatabaseConfig, check_database, load_database
from Searchable.config.entities import EntityConfig, check_entities, load_entities
from Searchable.config.output import OutputConfig, check_output, load_output
from Searchable.config.runtime import RuntimeConfig, check_runtime, load_runtime
from Searchable.core.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    database: DatabaseConfig
    entities: Mapping[str, EntityConfig]
    output: OutputConfig

    def entity(self, name: str) -> EntityConfig:
        """Return a searchable entity by name.

        Raises:
            ConfigurationError: If no entity has that name.
        """
        try:
            return self.entities[name]
        except KeyError:
            raise ConfigurationError(f"Unknown searchable entity: {name}") from None


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    database = load_database(raw)
    entities = load_entities(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_database(database)
    check_entities(entities)
    check_output(output)

    config = AppConfig(
        runtime=runtime,
        database=database,
        entities=entities,
        output=output,
    )
    check_cross_domain(config)
    return config


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(
    config_path: Path, default_path: Path = Path("config/default.yml")
) -> AppConfig:
    """Load config by merging defaults and optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    merged = merge_config_dicts(base, override)
    return parse_config_dict(merged)


def check_cross_domain(config: AppConfig) -> None:
    """Validate that every entity points at a configured connection."""
    for name, entity in config.entities.items():
        if entity.connection is not None and entity.connection not in config.database.connections:
            raise ValueError(f"searchable.{name}.connection refers to unknown connection: {entity.connection}")


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
