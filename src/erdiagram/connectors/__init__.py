"""Schema snapshot sources for erdiagram."""

from erdiagram.connectors.base import BaseSnapshotSource
from erdiagram.connectors.csv_loader import CSVSnapshotSource
from erdiagram.connectors.json_loader import JSONSnapshotSource
from erdiagram.connectors.registry import SOURCE_REGISTRY, SnapshotSourceFactory

__all__ = [
    "BaseSnapshotSource",
    "CSVSnapshotSource",
    "JSONSnapshotSource",
    "SnapshotSourceFactory",
    "SOURCE_REGISTRY",
]
