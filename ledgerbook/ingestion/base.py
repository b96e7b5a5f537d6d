"""Base record source interface for transaction ingestion."""

from abc import ABC, abstractmethod
from typing import Any


class BaseRecordSource(ABC):
    """Abstract provider of the unordered transaction log.

    Implementations return every raw row on each call; nothing is cached
    between calls.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable identifier used in error messages."""
        ...

    @abstractmethod
    def fetch_rows(self) -> list[dict[str, Any]]:
        """Return all raw rows in ingestion order.

        Raises:
            RecordSourceError: the underlying store cannot be read.
        """
        ...
