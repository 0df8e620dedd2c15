"""Node, edge and geometry types of the relationship diagram."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

PRIMARY_KEY = "PRI"


@dataclass(frozen=True)
class Point:
    """A point in diagram coordinates (y grows downwards)."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def expanded(self, padding: float) -> Rect:
        return Rect(
            self.x - padding,
            self.y - padding,
            self.width + padding * 2,
            self.height + padding * 2,
        )

    def intersects(self, other: Rect) -> bool:
        """Open-interval overlap test; touching edges do not count."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class Side(str, Enum):
    """Node border an edge anchor sits on."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def direction(self) -> int:
        """Unit x direction pointing away from the node."""
        return -1 if self is Side.LEFT else 1

    @property
    def opposite(self) -> Side:
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


@dataclass(frozen=True)
class Column:
    """A table row as drawn inside a node."""

    name: str
    display_type: str
    key_type: str = ""

    @property
    def is_primary_key(self) -> bool:
        return self.key_type == PRIMARY_KEY

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.display_type, "keyType": self.key_type}


@dataclass
class TableNode:
    """A table box. ``position`` is the top-left corner, (0, 0) until laid out."""

    id: str
    columns: Tuple[Column, ...]
    width: float
    height: float
    position: Point = field(default_factory=lambda: Point(0.0, 0.0))

    @property
    def rect(self) -> Rect:
        return Rect(self.position.x, self.position.y, self.width, self.height)

    @property
    def center(self) -> Point:
        return self.rect.center

    def column_index(self, column_name: str) -> Optional[int]:
        for index, column in enumerate(self.columns):
            if column.name == column_name:
                return index
        return None

    def moved_to(self, position: Point) -> TableNode:
        return replace(self, position=position)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "x": self.position.x,
            "y": self.position.y,
            "width": self.width,
            "height": self.height,
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class Relationship:
    """A foreign key drawn as an edge from the referencing column to the referenced one."""

    id: str
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    constraint_name: str
    label: str

    @property
    def source_field(self) -> Tuple[str, str]:
        return (self.source_table, self.source_column)

    @property
    def target_field(self) -> Tuple[str, str]:
        return (self.target_table, self.target_column)

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "sourceTable": self.source_table,
            "sourceColumn": self.source_column,
            "targetTable": self.target_table,
            "targetColumn": self.target_column,
            "constraintName": self.constraint_name,
            "label": self.label,
        }


@dataclass(frozen=True)
class EdgeRoute:
    """The chosen polyline of one edge plus its renderable form."""

    edge_id: str
    points: Tuple[Point, ...]
    svg_path: str
    label_anchor: Point
