"""Error types raised while resolving search definitions."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a search definition or dialect cannot be used to build a query.

    These are programming errors in the searchable entity definition (empty
    column map, non-positive weight, unknown driver) and are never retried.
    """
