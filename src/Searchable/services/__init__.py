"""Search service layer for Searchable.

Exposes the per-entity search service and its factory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from Searchable.services.searchable import ColumnLister, SearchableModel, apply_prefix

if TYPE_CHECKING:
    from Searchable.config import AppConfig


def create_searchable(
    config: AppConfig,
    entity_name: str,
    list_columns: ColumnLister | None = None,
) -> SearchableModel:
    """Create the search service for a configured entity.

    Args:
        config: Application configuration.
        entity_name: Key under ``searchable``.
        list_columns: Optional schema introspection callback.

    Returns:
        SearchableModel for the entity.

    Raises:
        ConfigurationError: If the entity is not configured.
    """
    return SearchableModel(
        entity=config.entity(entity_name),
        database=config.database,
        list_columns=list_columns,
    )


__all__ = [
    "ColumnLister",
    "SearchableModel",
    "apply_prefix",
    "create_searchable",
]
