"""JSON snapshot source."""

from __future__ import annotations

from pathlib import Path

from erdiagram.connectors.base import BaseSnapshotSource
from erdiagram.core.schema import SchemaSnapshot


class JSONSnapshotSource(BaseSnapshotSource):
    """Load a snapshot saved with ``SchemaSnapshot.save``."""

    def __init__(self, path: str | Path, **kwargs):
        super().__init__(path=str(path), **kwargs)
        self.path = Path(path)

        if not self.path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {self.path}")

    def load_snapshot(self) -> SchemaSnapshot:
        snapshot = SchemaSnapshot.load(self.path)
        self.logger.info(f"Loaded snapshot from {self.path}: {snapshot}")
        return snapshot
