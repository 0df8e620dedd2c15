"""Schema snapshot record types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ColumnRecord:
    """One column as reported by the metadata collaborator."""

    table_name: str
    column_name: str
    column_type: str = ""
    data_type: str = ""
    column_key: str = ""  # "PRI" marks a primary-key column

    @property
    def display_type(self) -> str:
        """Full column type when known, else the bare data type."""
        return self.column_type or self.data_type

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ColumnRecord:
        """Create from a snake_case or camelCase mapping."""
        return cls(
            table_name=_pick(data, "table_name", "tableName", required=True),
            column_name=_pick(data, "column_name", "columnName", required=True),
            column_type=_pick(data, "column_type", "columnType"),
            data_type=_pick(data, "data_type", "dataType"),
            column_key=_pick(data, "column_key", "columnKey"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "table_name": self.table_name,
            "column_name": self.column_name,
            "column_type": self.column_type,
            "data_type": self.data_type,
            "column_key": self.column_key,
        }

    def __repr__(self) -> str:
        return f"Column({self.table_name}.{self.column_name}: {self.display_type})"


@dataclass(frozen=True)
class ForeignKeyRecord:
    """Foreign key relationship between two table columns."""

    table_name: str
    column_name: str
    referenced_table_name: str
    referenced_column_name: str
    constraint_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ForeignKeyRecord:
        """Create from a snake_case or camelCase mapping."""
        return cls(
            table_name=_pick(data, "table_name", "tableName", required=True),
            column_name=_pick(data, "column_name", "columnName", required=True),
            referenced_table_name=_pick(
                data, "referenced_table_name", "referencedTableName", required=True
            ),
            referenced_column_name=_pick(
                data, "referenced_column_name", "referencedColumnName", required=True
            ),
            constraint_name=_pick(data, "constraint_name", "constraintName"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "table_name": self.table_name,
            "column_name": self.column_name,
            "referenced_table_name": self.referenced_table_name,
            "referenced_column_name": self.referenced_column_name,
            "constraint_name": self.constraint_name,
        }

    def __repr__(self) -> str:
        return (
            f"FK({self.table_name}.{self.column_name} -> "
            f"{self.referenced_table_name}.{self.referenced_column_name}, "
            f"constraint={self.constraint_name or 'fk'})"
        )


def _pick(data: Dict[str, Any], snake: str, camel: str, required: bool = False) -> str:
    if snake in data and data[snake] is not None:
        return str(data[snake])
    if camel in data and data[camel] is not None:
        return str(data[camel])
    if required:
        raise KeyError(snake)
    return ""
