"""Schema snapshot: the input of the diagram engine."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from erdiagram.core.schema.types import ColumnRecord, ForeignKeyRecord
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SchemaSnapshot:
    """Tables, columns and foreign keys of one schema at one point in time."""

    tables: List[str]
    columns: List[ColumnRecord] = field(default_factory=list)
    foreign_keys: List[ForeignKeyRecord] = field(default_factory=list)

    def save(self, path: str | Path) -> None:
        """Save snapshot to JSON file.

        Args:
            path: Path to save JSON file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Saved schema snapshot to {path}")

    @classmethod
    def load(cls, path: str | Path) -> SchemaSnapshot:
        """Load snapshot from JSON file.

        Args:
            path: Path to JSON file

        Returns:
            SchemaSnapshot instance

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a valid snapshot
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {path}")

        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Snapshot {path} is not valid JSON: {e}") from e

        return cls.from_dict(data)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "tables": list(self.tables),
            "columns": [column.to_dict() for column in self.columns],
            "foreign_keys": [fk.to_dict() for fk in self.foreign_keys],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> SchemaSnapshot:
        """Create from dictionary.

        Accepts both snake_case keys and the camelCase names used on the
        wire by the metadata service (``foreignKeys``, ``tableName``, ...).

        Args:
            data: Dictionary with snapshot data

        Returns:
            SchemaSnapshot instance
        """
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot must be a JSON object, got {type(data).__name__}")
        if "tables" not in data:
            raise ValueError("Snapshot is missing the 'tables' list")

        tables = [str(name) for name in data["tables"]]
        fk_data = data.get("foreign_keys", data.get("foreignKeys", []))

        try:
            columns = [ColumnRecord.from_dict(c) for c in data.get("columns", [])]
            foreign_keys = [ForeignKeyRecord.from_dict(fk) for fk in fk_data]
        except KeyError as e:
            raise ValueError(f"Snapshot record is missing field {e}") from e

        return cls(tables=tables, columns=columns, foreign_keys=foreign_keys)

    def columns_for(self, table_name: str) -> List[ColumnRecord]:
        """Column records of one table, in snapshot order."""
        return [c for c in self.columns if c.table_name == table_name]

    def __repr__(self) -> str:
        return (
            f"SchemaSnapshot(tables={len(self.tables)}, "
            f"columns={len(self.columns)}, fks={len(self.foreign_keys)})"
        )
