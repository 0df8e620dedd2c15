"""CSV snapshot source: one file each for tables, columns and foreign keys."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from erdiagram.connectors.base import BaseSnapshotSource
from erdiagram.core.schema import ColumnRecord, ForeignKeyRecord, SchemaSnapshot
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)

TABLES_FILE = "tables.csv"
COLUMNS_FILE = "columns.csv"
FOREIGN_KEYS_FILE = "foreign_keys.csv"


class CSVSnapshotSource(BaseSnapshotSource):
    """Load a schema snapshot from a directory of CSV exports.

    Expected files:
        tables.csv: ``table_name``
        columns.csv: ``table_name, column_name, column_type, data_type, column_key``
        foreign_keys.csv (optional): ``table_name, column_name,
            referenced_table_name, referenced_column_name, constraint_name``

    camelCase headers (``tableName`` ...) are accepted as well.
    """

    def __init__(self, data_dir: str | Path, **pandas_kwargs):
        """Initialize CSV source.

        Args:
            data_dir: Directory containing the CSV files
            **pandas_kwargs: Additional arguments passed to pd.read_csv()

        Example:
            >>> source = CSVSnapshotSource(data_dir="./metadata")
            >>> snapshot = source.load_snapshot()
        """
        super().__init__(data_dir=str(data_dir), **pandas_kwargs)

        self.data_dir = Path(data_dir)
        self.pandas_kwargs = pandas_kwargs

        if not self.data_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {self.data_dir}")

        if not self.data_dir.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.data_dir}")

    def load_snapshot(self) -> SchemaSnapshot:
        tables_df = self._read(TABLES_FILE, required=True)
        columns_df = self._read(COLUMNS_FILE, required=True)
        fks_df = self._read(FOREIGN_KEYS_FILE, required=False)

        name_column = "table_name" if "table_name" in tables_df.columns else "tableName"
        if name_column not in tables_df.columns:
            raise ValueError(f"{TABLES_FILE} needs a 'table_name' column")

        try:
            tables = [name for name in tables_df[name_column].tolist() if name]
            columns = [ColumnRecord.from_dict(row) for row in _records(columns_df)]
            foreign_keys = [ForeignKeyRecord.from_dict(row) for row in _records(fks_df)]
        except KeyError as e:
            raise ValueError(f"Missing CSV column: {e}") from e

        self.logger.info(
            f"Loaded {len(tables)} tables, {len(columns)} columns, "
            f"{len(foreign_keys)} foreign keys from {self.data_dir}"
        )
        return SchemaSnapshot(tables=tables, columns=columns, foreign_keys=foreign_keys)

    def _read(self, filename: str, required: bool) -> pd.DataFrame:
        csv_file = self.data_dir / filename

        if not csv_file.exists():
            if required:
                raise FileNotFoundError(f"CSV file not found: {csv_file}")
            self.logger.debug(f"No {filename} in {self.data_dir}, assuming none")
            return pd.DataFrame()

        try:
            df = pd.read_csv(csv_file, dtype=str, keep_default_na=False, **self.pandas_kwargs)
        except Exception as e:
            self.logger.error(f"Failed to load {csv_file}: {e}")
            raise

        self.logger.debug(f"  Loaded {csv_file.name}: {len(df)} rows")
        return df


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    return df.to_dict(orient="records")
