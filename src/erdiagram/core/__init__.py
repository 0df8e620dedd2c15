"""Core modules for erdiagram."""

from erdiagram.core.diagram import (
    DiagramSession,
    HighlightIndexer,
    LayeredLayoutEngine,
    OrthogonalRouter,
    PathRenderer,
    SchemaGraphBuilder,
    ViewportFitter,
)
from erdiagram.core.schema import ColumnRecord, ForeignKeyRecord, SchemaSnapshot

__all__ = [
    # Schema
    "ColumnRecord",
    "ForeignKeyRecord",
    "SchemaSnapshot",
    # Diagram
    "DiagramSession",
    "HighlightIndexer",
    "LayeredLayoutEngine",
    "OrthogonalRouter",
    "PathRenderer",
    "SchemaGraphBuilder",
    "ViewportFitter",
]
