"""Base snapshot source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from erdiagram.core.schema import SchemaSnapshot
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)


class BaseSnapshotSource(ABC):
    """Abstract base class for schema snapshot sources.

    A source stands in for the metadata collaborator: it hands the diagram
    engine table names, column records and foreign-key records.
    """

    def __init__(self, **kwargs):
        """Initialize source.

        Args:
            **kwargs: Source-specific configuration
        """
        self.config = kwargs
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def load_snapshot(self) -> SchemaSnapshot:
        """Read the schema snapshot.

        Returns:
            SchemaSnapshot

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        pass

    def get_table_names(self) -> List[str]:
        return list(self.load_snapshot().tables)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.config})"
