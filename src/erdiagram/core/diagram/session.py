"""The diagram view's state and event handlers.

A ``DiagramSession`` owns one diagram: the built graph, live node positions,
route biases, hover state and the last camera fit. All handlers run
synchronously; a newer call simply supersedes the visual result of an older
one. Routes are never stored: they are recomputed from live positions each
time the diagram is rendered.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from erdiagram.core.diagram.builder import DiagramGraph, SchemaGraphBuilder
from erdiagram.core.diagram.highlight import EdgeStyle, HighlightIndexer, HighlightState
from erdiagram.core.diagram.layout import LayeredLayoutEngine
from erdiagram.core.diagram.model import EdgeRoute, Point, Rect, Relationship, TableNode
from erdiagram.core.diagram.renderer import PathRenderer
from erdiagram.core.diagram.router import OrthogonalRouter, assign_route_biases
from erdiagram.core.diagram.settings import (
    LayoutSettings,
    NodeSettings,
    RoutingSettings,
    ViewportSettings,
)
from erdiagram.core.diagram.viewport import FitResult, Viewport, ViewportFitter
from erdiagram.core.schema import SchemaSnapshot
from erdiagram.utils.config import Config, get_config
from erdiagram.utils.logging import get_logger
from erdiagram.utils.timing import TimingContext

logger = get_logger(__name__)


@dataclass
class EdgeDescriptor:
    """Everything the rendering layer needs to draw one edge."""

    edge: Relationship
    route: EdgeRoute
    is_highlighted: bool
    style: EdgeStyle

    @property
    def id(self) -> str:
        return self.edge.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.edge.id,
            "source": self.edge.source_table,
            "target": self.edge.target_table,
            "label": self.edge.label,
            "svgPathString": self.route.svg_path,
            "labelAnchorPoint": self.route.label_anchor.to_dict(),
            "points": [p.to_dict() for p in self.route.points],
            "isHighlighted": self.is_highlighted,
            "style": self.style.to_dict(),
        }


@dataclass
class RenderedDiagram:
    """A frame: positioned nodes, drawable edges, hover state and camera."""

    nodes: List[Dict[str, Any]]
    edges: List[EdgeDescriptor]
    highlight: HighlightState
    viewport: Optional[Viewport] = None
    status: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": self.nodes,
            "edges": [edge.to_dict() for edge in self.edges],
            "highlight": self.highlight.to_dict(),
            "viewport": self.viewport.to_dict() if self.viewport else None,
            "status": self.status,
        }


class DiagramSession:
    """Build, lay out, route and frame one schema diagram.

    Example:
        >>> session = DiagramSession()
        >>> session.load(snapshot)
        >>> session.hover_field("Orders", "customer_id")
        >>> frame = session.render()
        >>> [edge.id for edge in frame.edges if edge.is_highlighted]
        ['Orders.customer_id->Customers.id::fk_orders_customer']
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        builder: Optional[SchemaGraphBuilder] = None,
        layout_engine: Optional[LayeredLayoutEngine] = None,
        router: Optional[OrthogonalRouter] = None,
        renderer: Optional[PathRenderer] = None,
        fitter: Optional[ViewportFitter] = None,
    ):
        config = config or get_config()
        self.node_settings = NodeSettings.from_config(config)
        routing = RoutingSettings.from_config(config)

        self.builder = builder or SchemaGraphBuilder(self.node_settings)
        self.layout_engine = layout_engine or LayeredLayoutEngine(
            LayoutSettings.from_config(config)
        )
        self.router = router or OrthogonalRouter(routing)
        self.renderer = renderer or PathRenderer(routing.corner_radius)
        self.fitter = fitter or ViewportFitter(ViewportSettings.from_config(config))
        self.highlight = HighlightIndexer()

        self._nodes: Dict[str, TableNode] = {}
        self._edges: List[Relationship] = []
        self._biases: Dict[str, float] = {}
        self._fit: Optional[FitResult] = None
        self._canvas: Tuple[Optional[float], Optional[float]] = (None, None)
        self.status = ""

    # ─── Model access ─────────────────────────────────────────────────────

    @property
    def nodes(self) -> List[TableNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Relationship]:
        return list(self._edges)

    @property
    def is_loaded(self) -> bool:
        return bool(self._nodes)

    @property
    def viewport(self) -> Optional[Viewport]:
        return self._fit.viewport if self._fit else None

    @property
    def last_fit(self) -> Optional[FitResult]:
        return self._fit

    def node(self, node_id: str) -> TableNode:
        return self._nodes[node_id]

    def route_bias(self, edge_id: str) -> float:
        return self._biases.get(edge_id, 0.0)

    def node_geometry(self) -> Iterator[Tuple[str, Rect]]:
        """Current bounding boxes of every node, from live positions."""
        for node_id, node in self._nodes.items():
            yield node_id, node.rect

    # ─── Events ───────────────────────────────────────────────────────────

    def load(self, snapshot: SchemaSnapshot) -> DiagramGraph:
        """Rebuild the whole diagram from a snapshot.

        Clears the hover state, lays out every node, assigns route biases and
        fits the camera.
        """
        start = time.perf_counter()
        with TimingContext("diagram.load"):
            graph = self.builder.build(snapshot)
            positioned = self.layout_engine.apply(graph.nodes, graph.edges)

            self._nodes = {node.id: node for node in positioned}
            self._edges = list(graph.edges)
            self._biases = assign_route_biases(self._edges, self._nodes)
            self.highlight.reset(self._edges)
            self.router.clear_cache()
            self._fit = self._fit_if_loaded()

        elapsed_ms = (time.perf_counter() - start) * 1000
        self.status = (
            f"Loaded {len(self._nodes)} tables, {len(self._edges)} relations "
            f"in {elapsed_ms:.0f} ms"
        )
        logger.info(self.status)
        return DiagramGraph(nodes=self.nodes, edges=self.edges)

    def refresh(self, snapshot: SchemaSnapshot) -> DiagramGraph:
        """Reload after the schema changed; identical input keeps edge ids."""
        return self.load(snapshot)

    def auto_layout(self) -> Dict[str, Point]:
        """Recompute every position from scratch, then refit the camera."""
        positioned = self.layout_engine.apply(self.nodes, self._edges)
        self._nodes = {node.id: node for node in positioned}
        self._biases = assign_route_biases(self._edges, self._nodes)
        self._fit = self._fit_if_loaded()
        logger.info(f"Auto layout placed {len(self._nodes)} tables")
        return {node_id: node.position for node_id, node in self._nodes.items()}

    def drag_node(self, node_id: str, dx: float, dy: float) -> TableNode:
        """Move one node by a delta. Edges follow on the next render.

        Raises:
            KeyError: If the node is not in the diagram
        """
        if node_id not in self._nodes:
            raise KeyError(f"Unknown table: {node_id}")
        node = self._nodes[node_id]
        moved = node.moved_to(node.position.offset(dx, dy))
        self._nodes[node_id] = moved
        return moved

    def hover_field(self, table: str, column: str) -> None:
        self.highlight.hover_field(table, column)

    def leave_field(self) -> None:
        self.highlight.leave_field()

    def hover_edge(self, edge_id: str) -> None:
        self.highlight.hover_edge(edge_id)

    def leave_edge(self) -> None:
        self.highlight.leave_edge()

    def resize(self, canvas_width: float, canvas_height: float) -> Optional[FitResult]:
        """Record a new canvas size and refit."""
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError(
                f"Canvas size must be positive, got {canvas_width}x{canvas_height}"
            )
        self._canvas = (canvas_width, canvas_height)
        return self.fit_viewport()

    def fit_viewport(
        self,
        canvas_width: Optional[float] = None,
        canvas_height: Optional[float] = None,
        settled_zoom: Optional[Callable[[Viewport], float]] = None,
    ) -> Optional[FitResult]:
        """Fit or reset the camera.

        Returns:
            The fit, or None when the diagram has no nodes
        """
        width = canvas_width if canvas_width is not None else self._canvas[0]
        height = canvas_height if canvas_height is not None else self._canvas[1]
        self._fit = self.fitter.fit(self.nodes, self._edges, width, height, settled_zoom)
        return self._fit

    def close(self) -> None:
        """Discard the diagram."""
        self._nodes = {}
        self._edges = []
        self._biases = {}
        self._fit = None
        self.highlight.reset([])
        self.router.clear_cache()
        self.status = ""

    # ─── Output ───────────────────────────────────────────────────────────

    def route(self, edge: Relationship) -> EdgeRoute:
        """Route and render one edge against the current node geometry."""
        points = self.router.route_edge(
            edge,
            self._nodes,
            self.node_geometry(),
            self.node_settings,
            self.route_bias(edge.id),
        )
        return self.renderer.render(edge.id, points)

    def render(self) -> RenderedDiagram:
        """Positioned nodes and drawable edges for the current state."""
        with TimingContext("diagram.route"):
            edges = [
                EdgeDescriptor(
                    edge=edge,
                    route=self.route(edge),
                    is_highlighted=self.highlight.is_edge_highlighted(edge.id),
                    style=self.highlight.edge_style(edge.id),
                )
                for edge in self._edges
            ]

        nodes = []
        for node in self._nodes.values():
            data = node.to_dict()
            highlighted = self.highlight.highlighted_columns(node.id)
            data["highlightedColumns"] = [
                column.name for column in node.columns if column.name in highlighted
            ]
            nodes.append(data)

        return RenderedDiagram(
            nodes=nodes,
            edges=edges,
            highlight=self.highlight.state,
            viewport=self.viewport,
            status=self.status,
        )

    def _fit_if_loaded(self) -> Optional[FitResult]:
        if not self._nodes:
            return None
        return self.fitter.fit(self.nodes, self._edges, *self._canvas)
