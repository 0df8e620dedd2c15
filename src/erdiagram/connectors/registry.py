"""Snapshot source registry and factory."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Type

from erdiagram.connectors.base import BaseSnapshotSource
from erdiagram.connectors.csv_loader import CSVSnapshotSource
from erdiagram.connectors.json_loader import JSONSnapshotSource
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)

# Registry of available sources
SOURCE_REGISTRY: Dict[str, Type[BaseSnapshotSource]] = {
    "json": JSONSnapshotSource,
    "csv": CSVSnapshotSource,
}


class SnapshotSourceFactory:
    """Factory for creating snapshot source instances."""

    @staticmethod
    def create_source(source_type: str, **kwargs) -> BaseSnapshotSource:
        """Create a source instance.

        Args:
            source_type: Source type ('json', 'csv')
            **kwargs: Source-specific configuration

        Returns:
            BaseSnapshotSource instance

        Raises:
            ValueError: If source type is not supported

        Example:
            >>> source = SnapshotSourceFactory.create_source("csv", data_dir="./metadata")
        """
        source_type_lower = source_type.lower().strip()

        if source_type_lower not in SOURCE_REGISTRY:
            available = ", ".join(sorted(SOURCE_REGISTRY.keys()))
            raise ValueError(
                f"Unknown snapshot source type: {source_type}. Available: {available}"
            )

        source_class = SOURCE_REGISTRY[source_type_lower]
        logger.info(f"Creating {source_class.__name__} source")

        return source_class(**kwargs)

    @staticmethod
    def from_path(path: str | Path) -> BaseSnapshotSource:
        """Pick a source by path: directories are CSV exports, files are JSON."""
        path = Path(path)
        if path.is_dir():
            return CSVSnapshotSource(data_dir=path)
        return JSONSnapshotSource(path=path)

    @staticmethod
    def register_source(name: str, source_class: Type[BaseSnapshotSource]) -> None:
        """Register a custom source.

        Args:
            name: Source name
            source_class: Source class (must inherit from BaseSnapshotSource)
        """
        if not issubclass(source_class, BaseSnapshotSource):
            raise TypeError(
                f"Source class must inherit from BaseSnapshotSource, got {source_class}"
            )

        SOURCE_REGISTRY[name.lower()] = source_class
        logger.info(f"Registered custom snapshot source: {name}")

    @staticmethod
    def list_sources() -> List[str]:
        return sorted(SOURCE_REGISTRY.keys())
