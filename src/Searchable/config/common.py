from __future__ import annotations

"""Value readers shared by the config domains.

Every reader takes the dotted ``config_key`` of the value it checks so that
errors point at the offending YAML entry, e.g.
``searchable.users.columns.users.bio must be a finite positive number``.
Type mismatches raise ``TypeError``; missing or out-of-range values raise
``ValueError``.
"""

import math
from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return the ``key`` mapping of ``raw``; ``{}`` when optional and absent."""
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    """Return ``section[field]``; an explicit YAML ``null`` also yields ``default``."""
    value = section.get(field)
    return default if value is None else value


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_optional_str(value: Any, config_key: str) -> str | None:
    return None if value is None else expect_str(value, config_key)


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_weight(value: Any, config_key: str) -> float:
    """Validate a column weight: a finite number greater than zero.

    YAML accepts ``.nan`` and ``.inf`` as floats; both are rejected here so
    they never reach generated SQL.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{config_key} must be a number")
    weight = float(value)
    if not math.isfinite(weight) or weight <= 0:
        raise ValueError(f"{config_key} must be a finite positive number")
    return weight


def expect_mapping(value: Any, config_key: str) -> Mapping[str, Any]:
    """Validate a mapping keyed by strings (column names, connection names)."""
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    for key in value:
        if not isinstance(key, str):
            raise TypeError(f"{config_key} keys must be strings")
    return value


def expect_str_list(value: Any, config_key: str) -> list[str]:
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    return [expect_str(item, f"{config_key}[{idx}]") for idx, item in enumerate(value)]


def expect_optional_str_list(value: Any, config_key: str) -> list[str] | None:
    return None if value is None else expect_str_list(value, config_key)
