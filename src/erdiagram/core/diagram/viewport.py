"""Camera framing: fit the interesting part of the diagram, but stay legible."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from erdiagram.core.diagram.geometry import bounding_rect
from erdiagram.core.diagram.model import Rect, Relationship, TableNode
from erdiagram.core.diagram.settings import ViewportSettings
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Viewport:
    """Pan and zoom; a diagram point p is drawn at ``p * zoom + (x, y)``."""

    x: float
    y: float
    zoom: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "zoom": self.zoom}


class FitPhase(str, Enum):
    FRAMING_FOCUS = "framing_focus"
    CHECKING_LEGIBILITY = "checking_legibility"


@dataclass(frozen=True)
class ViewportTransition:
    """One camera move issued while fitting."""

    phase: FitPhase
    viewport: Viewport
    duration_ms: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "phase": self.phase.value,
            "viewport": self.viewport.to_dict(),
            "durationMs": self.duration_ms,
        }


@dataclass
class FitResult:
    """Outcome of one fit: the focus set, every camera move, the final camera."""

    focus_ids: List[str]
    transitions: List[ViewportTransition] = field(default_factory=list)
    used_full_bounds: bool = False

    @property
    def viewport(self) -> Viewport:
        return self.transitions[-1].viewport

    def to_dict(self) -> Dict[str, object]:
        return {
            "focus": list(self.focus_ids),
            "transitions": [t.to_dict() for t in self.transitions],
            "viewport": self.viewport.to_dict(),
            "usedFullBounds": self.used_full_bounds,
        }


def fit_bounds(
    bounds: Rect,
    canvas_width: float,
    canvas_height: float,
    padding: float,
    min_zoom: float,
    max_zoom: float,
) -> Viewport:
    """Largest zoom (within the clamp) showing ``bounds`` centred with padding."""
    padded_width = max(bounds.width, 1.0) * (1 + padding)
    padded_height = max(bounds.height, 1.0) * (1 + padding)
    zoom = min(canvas_width / padded_width, canvas_height / padded_height)
    zoom = min(max(zoom, min_zoom), max_zoom)
    return centre_on(bounds, canvas_width, canvas_height, zoom)


def centre_on(bounds: Rect, canvas_width: float, canvas_height: float, zoom: float) -> Viewport:
    centre = bounds.center
    return Viewport(
        x=canvas_width / 2 - centre.x * zoom,
        y=canvas_height / 2 - centre.y * zoom,
        zoom=zoom,
    )


def focus_nodes(
    nodes: Sequence[TableNode], edges: Sequence[Relationship], threshold: int
) -> List[TableNode]:
    """Nodes worth framing first.

    Small diagrams, and diagrams without edges, are framed whole. Otherwise
    the hub (highest degree, earliest on ties) and its direct neighbours.
    """
    known = {node.id for node in nodes}
    edges = [e for e in edges if e.source_table in known and e.target_table in known]
    if len(nodes) <= threshold or not edges:
        return list(nodes)

    degree: Dict[str, int] = {}
    for edge in edges:
        degree[edge.source_table] = degree.get(edge.source_table, 0) + 1
        degree[edge.target_table] = degree.get(edge.target_table, 0) + 1

    hub = None
    for node in nodes:
        if hub is None or degree.get(node.id, 0) > degree.get(hub, 0):
            hub = node.id

    members = {hub}
    for edge in edges:
        if edge.source_table == hub:
            members.add(edge.target_table)
        elif edge.target_table == hub:
            members.add(edge.source_table)
    return [node for node in nodes if node.id in members]


class ViewportFitter:
    """Two-phase camera fit.

    ``FRAMING_FOCUS`` fits the focus set's bounds with padding, animated.
    ``CHECKING_LEGIBILITY`` then reads the zoom the fit settled at; if it is
    below the minimum comfortable zoom the whole diagram is centred at that
    zoom instead.
    """

    def __init__(self, settings: Optional[ViewportSettings] = None):
        self.settings = settings or ViewportSettings.from_config()

    def fit(
        self,
        nodes: Sequence[TableNode],
        edges: Sequence[Relationship],
        canvas_width: Optional[float] = None,
        canvas_height: Optional[float] = None,
        settled_zoom: Optional[Callable[[Viewport], float]] = None,
    ) -> Optional[FitResult]:
        """Fit the camera to the diagram.

        Args:
            nodes: Positioned nodes
            edges: Diagram edges (used to find the hub)
            canvas_width: Visible canvas width, defaults to the configured size
            canvas_height: Visible canvas height, defaults to the configured size
            settled_zoom: Reports the zoom the renderer settled at after the
                focus fit; defaults to the fitted zoom itself

        Returns:
            FitResult, or None for an empty diagram

        Raises:
            ValueError: If a canvas dimension is not positive
        """
        settings = self.settings
        width = settings.canvas_width if canvas_width is None else canvas_width
        height = settings.canvas_height if canvas_height is None else canvas_height
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        if not nodes:
            return None

        focus = focus_nodes(nodes, edges, settings.focus_threshold)
        result = FitResult(focus_ids=[node.id for node in focus])

        framed = fit_bounds(
            bounding_rect(node.rect for node in focus),
            width,
            height,
            settings.fit_padding,
            settings.min_zoom,
            settings.max_zoom,
        )
        result.transitions.append(
            ViewportTransition(FitPhase.FRAMING_FOCUS, framed, settings.duration_ms)
        )

        zoom = settled_zoom(framed) if settled_zoom else framed.zoom
        if zoom < settings.min_comfortable_zoom:
            full = centre_on(
                bounding_rect(node.rect for node in nodes),
                width,
                height,
                settings.min_comfortable_zoom,
            )
            result.transitions.append(
                ViewportTransition(FitPhase.CHECKING_LEGIBILITY, full, settings.duration_ms)
            )
            result.used_full_bounds = True
            logger.debug(
                f"Fit zoom {zoom:.2f} below {settings.min_comfortable_zoom}, "
                f"centring all {len(nodes)} nodes"
            )
        return result
