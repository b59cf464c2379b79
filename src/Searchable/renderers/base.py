"""Base classes for output writers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Rows returned by one search.

    Attributes:
        entity: Searched entity name.
        phrase: Search phrase as typed.
        rows: Result rows as column -> value mappings, best match first.
        total: Number of matching rows before paging.
    """

    entity: str
    phrase: str
    rows: Sequence[Mapping[str, Any]]
    total: int


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_result(self, result: SearchResult) -> None:
        """Write the result of one search."""

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'search').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_result(self, result: SearchResult) -> None:
        for writer in self.writers:
            writer.write_result(result)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
