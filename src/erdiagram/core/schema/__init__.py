"""Schema snapshot records."""

from erdiagram.core.schema.snapshot import SchemaSnapshot
from erdiagram.core.schema.types import ColumnRecord, ForeignKeyRecord

__all__ = [
    "ColumnRecord",
    "ForeignKeyRecord",
    "SchemaSnapshot",
]
