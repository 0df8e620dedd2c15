"""Relationship diagram engine: build, lay out, route, render, highlight, frame."""

from erdiagram.core.diagram.builder import DiagramGraph, SchemaGraphBuilder, edge_id
from erdiagram.core.diagram.highlight import (
    NO_HIGHLIGHT,
    HighlightIndexer,
    HighlightState,
    HoveredEdge,
    HoveredField,
    NoHighlight,
)
from erdiagram.core.diagram.layout import LayeredLayoutEngine
from erdiagram.core.diagram.model import (
    Column,
    EdgeRoute,
    Point,
    Rect,
    Relationship,
    Side,
    TableNode,
)
from erdiagram.core.diagram.renderer import PathRenderer
from erdiagram.core.diagram.router import OrthogonalRouter
from erdiagram.core.diagram.session import DiagramSession, RenderedDiagram
from erdiagram.core.diagram.viewport import FitPhase, Viewport, ViewportFitter

__all__ = [
    # Model
    "Column",
    "EdgeRoute",
    "Point",
    "Rect",
    "Relationship",
    "Side",
    "TableNode",
    # Pipeline
    "DiagramGraph",
    "SchemaGraphBuilder",
    "edge_id",
    "LayeredLayoutEngine",
    "OrthogonalRouter",
    "PathRenderer",
    # Overlays
    "HighlightIndexer",
    "HighlightState",
    "HoveredEdge",
    "HoveredField",
    "NoHighlight",
    "NO_HIGHLIGHT",
    "FitPhase",
    "Viewport",
    "ViewportFitter",
    # Session
    "DiagramSession",
    "RenderedDiagram",
]
