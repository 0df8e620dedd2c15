"""Pydantic models for API requests and responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from erdiagram.core.schema import SchemaSnapshot


class ColumnModel(BaseModel):
    """One column record."""

    table_name: str = Field(..., min_length=1)
    column_name: str = Field(..., min_length=1)
    column_type: str = Field("", description="Full column type, e.g. varchar(255)")
    data_type: str = Field("", description="Bare data type, used when column_type is empty")
    column_key: str = Field("", description="'PRI' for primary-key columns")


class ForeignKeyModel(BaseModel):
    """One foreign-key record."""

    table_name: str = Field(..., min_length=1)
    column_name: str = Field(..., min_length=1)
    referenced_table_name: str = Field(..., min_length=1)
    referenced_column_name: str = Field(..., min_length=1)
    constraint_name: str = Field("", description="Empty names are rendered as 'fk' in edge ids")


class SnapshotModel(BaseModel):
    """Schema snapshot as supplied by a metadata collaborator."""

    tables: List[str] = Field(..., description="Table names, in display order")
    columns: List[ColumnModel] = Field(default_factory=list)
    foreign_keys: List[ForeignKeyModel] = Field(default_factory=list)

    def to_snapshot(self) -> SchemaSnapshot:
        return SchemaSnapshot.from_dict(self.model_dump())

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "tables": ["Orders", "Customers"],
                    "columns": [
                        {"table_name": "Orders", "column_name": "id", "column_type": "int", "column_key": "PRI"},
                        {"table_name": "Orders", "column_name": "customer_id", "column_type": "int"},
                        {"table_name": "Customers", "column_name": "id", "column_type": "int", "column_key": "PRI"},
                        {"table_name": "Customers", "column_name": "name", "column_type": "varchar(255)"},
                    ],
                    "foreign_keys": [
                        {
                            "table_name": "Orders",
                            "column_name": "customer_id",
                            "referenced_table_name": "Customers",
                            "referenced_column_name": "id",
                            "constraint_name": "fk_orders_customer",
                        }
                    ],
                }
            ]
        }
    }


class FieldRef(BaseModel):
    """A (table, column) pair."""

    table: str = Field(..., min_length=1)
    column: str = Field(..., min_length=1)


class LayoutRequest(BaseModel):
    """Layout request model."""

    snapshot: SnapshotModel


class RenderRequest(BaseModel):
    """Render request model."""

    snapshot: SnapshotModel
    hover_field: Optional[FieldRef] = Field(None, description="Column row being hovered")
    hover_edge: Optional[str] = Field(None, description="Edge id being hovered")
    canvas_width: Optional[float] = Field(None, gt=0, description="Visible canvas width")
    canvas_height: Optional[float] = Field(None, gt=0, description="Visible canvas height")


class ViewportModel(BaseModel):
    """Camera pan and zoom."""

    x: float
    y: float
    zoom: float


class LayoutResponse(BaseModel):
    """Positioned nodes and the edge list."""

    nodes: List[Dict[str, Any]] = Field(..., description="{id, x, y, width, height, columns}")
    edges: List[Dict[str, Any]] = Field(..., description="Relationships between nodes")
    status: str = Field(..., description="Load summary")


class RenderResponse(BaseModel):
    """Everything a rendering layer needs for one frame."""

    nodes: List[Dict[str, Any]] = Field(..., description="Positioned nodes with highlightedColumns")
    edges: List[Dict[str, Any]] = Field(
        ..., description="{id, svgPathString, labelAnchorPoint, isHighlighted, style, ...}"
    )
    highlight: Dict[str, Any] = Field(..., description="Current hover state")
    viewport: Optional[ViewportModel] = Field(None, description="Final camera fit")
    status: str = Field(..., description="Load summary")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timings: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict, description="Latency statistics per engine operation"
    )
