"""Business logic for diagram commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from erdiagram.connectors import SnapshotSourceFactory
from erdiagram.core.diagram import DiagramSession
from erdiagram.core.schema import SchemaSnapshot
from erdiagram.utils.config import Config
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)


def parse_field(value: str) -> Tuple[str, str]:
    """Split ``TABLE.COLUMN`` at the first dot.

    Raises:
        ValueError: If there is no dot or either part is empty
    """
    table, sep, column = value.partition(".")
    if not sep or not table or not column:
        raise ValueError(f"Expected TABLE.COLUMN, got '{value}'")
    return table, column


class DiagramHandler:
    """Handler for diagram operations.

    Keeps CLI commands thin: each method loads a snapshot into a fresh
    ``DiagramSession`` and returns plain dicts ready for JSON output.

    Example:
        >>> handler = DiagramHandler(config)
        >>> result = handler.render("schema.json", hover_field="Orders.customer_id")
    """

    def __init__(self, config: Config):
        """Initialize handler.

        Args:
            config: Configuration instance
        """
        self.config = config

    def load_snapshot(self, path: str | Path) -> SchemaSnapshot:
        source = SnapshotSourceFactory.from_path(path)
        return source.load_snapshot()

    def open_session(self, path: str | Path) -> DiagramSession:
        session = DiagramSession(self.config)
        session.load(self.load_snapshot(path))
        return session

    def layout(self, path: str | Path) -> Dict[str, Any]:
        """Positioned nodes and the edge list."""
        session = self.open_session(path)
        return {
            "nodes": [node.to_dict() for node in session.nodes],
            "edges": [edge.to_dict() for edge in session.edges],
            "status": session.status,
        }

    def render(
        self,
        path: str | Path,
        hover_field: Optional[str] = None,
        hover_edge: Optional[str] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Render descriptors after applying an optional hover.

        Args:
            path: Snapshot file or CSV directory
            hover_field: ``TABLE.COLUMN`` to hover
            hover_edge: Edge id to hover
            width: Canvas width
            height: Canvas height

        Returns:
            Rendered diagram as a dict

        Raises:
            ValueError: If both a field and an edge are hovered
        """
        if hover_field and hover_edge:
            raise ValueError("Hover either a field or an edge, not both")

        session = self.open_session(path)
        if width is not None or height is not None:
            session.fit_viewport(width, height)
        if hover_field:
            session.hover_field(*parse_field(hover_field))
        elif hover_edge:
            session.hover_edge(hover_edge)
        return session.render().to_dict()

    def fit(
        self,
        path: str | Path,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> Optional[Dict[str, Any]]:
        """Camera fit for the canvas size, or None for an empty diagram."""
        session = self.open_session(path)
        result = session.fit_viewport(width, height)
        return result.to_dict() if result else None

    def hover(self, path: str | Path, field: str) -> Dict[str, Any]:
        """Highlighted edges and fields for hovering ``TABLE.COLUMN``."""
        session = self.open_session(path)
        table, column = parse_field(field)
        session.hover_field(table, column)
        highlight = session.highlight
        return {
            "field": {"table": table, "column": column},
            "edges": sorted(highlight.highlighted_edges),
            "fields": [f"{t}.{c}" for t, c in sorted(highlight.highlighted_fields)],
        }
