"""Hover-driven emphasis of edges and table rows.

The hover state is a tagged union, so a hovered field and a hovered edge
can never be active at the same time. Emphasis is derived from the state
and the current edge list on every change; it is a rendering signal only
and never feeds back into layout or routing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple, Union

from erdiagram.core.diagram.model import Relationship
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)

Field = Tuple[str, str]


@dataclass(frozen=True)
class NoHighlight:
    """Nothing is hovered."""

    kind = "none"

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class HoveredField:
    """A column row is hovered."""

    table: str
    column: str

    kind = "field"

    @property
    def field(self) -> Field:
        return (self.table, self.column)

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "table": self.table, "column": self.column}


@dataclass(frozen=True)
class HoveredEdge:
    """A relationship line is hovered."""

    edge_id: str

    kind = "edge"

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "id": self.edge_id}


HighlightState = Union[NoHighlight, HoveredField, HoveredEdge]

NO_HIGHLIGHT = NoHighlight()


@dataclass(frozen=True)
class EdgeStyle:
    """Stroke attributes of a drawn edge."""

    stroke: str
    stroke_width: float
    dash: str = ""
    animated: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
            "strokeDasharray": self.dash or None,
            "animated": self.animated,
        }


HIGHLIGHTED_EDGE_STYLE = EdgeStyle(stroke="#1e74ff", stroke_width=2.4, dash="6 4", animated=True)
DEFAULT_EDGE_STYLE = EdgeStyle(stroke="#8a97ab", stroke_width=1.35)


@dataclass(frozen=True)
class Emphasis:
    """Highlighted edge ids and (table, column) fields."""

    edges: FrozenSet[str] = frozenset()
    fields: FrozenSet[Field] = frozenset()

    def columns_of(self, table: str) -> FrozenSet[str]:
        return frozenset(column for owner, column in self.fields if owner == table)


def derive_emphasis(state: HighlightState, edges: Iterable[Relationship]) -> Emphasis:
    """Compute the emphasis sets for a hover state.

    Args:
        state: Current hover state
        edges: Edges of the diagram

    Returns:
        Emphasis with every edge touching the hovered field (or the hovered
        edge itself) and every field those edges connect, plus the hovered
        field.
    """
    if isinstance(state, NoHighlight):
        return Emphasis()

    highlighted_edges = set()
    highlighted_fields = set()

    if isinstance(state, HoveredField):
        highlighted_fields.add(state.field)

    for edge in edges:
        if isinstance(state, HoveredField):
            matched = state.field in (edge.source_field, edge.target_field)
        else:
            matched = edge.id == state.edge_id
        if matched:
            highlighted_edges.add(edge.id)
            highlighted_fields.add(edge.source_field)
            highlighted_fields.add(edge.target_field)

    if isinstance(state, HoveredEdge):
        highlighted_edges.add(state.edge_id)

    return Emphasis(frozenset(highlighted_edges), frozenset(highlighted_fields))


class HighlightIndexer:
    """Own the hover state of one diagram and the emphasis derived from it."""

    def __init__(self, edges: Sequence[Relationship] = ()):
        self._edges: List[Relationship] = list(edges)
        self._state: HighlightState = NO_HIGHLIGHT
        self._emphasis = Emphasis()

    @property
    def state(self) -> HighlightState:
        return self._state

    @property
    def emphasis(self) -> Emphasis:
        return self._emphasis

    @property
    def highlighted_edges(self) -> FrozenSet[str]:
        return self._emphasis.edges

    @property
    def highlighted_fields(self) -> FrozenSet[Field]:
        return self._emphasis.fields

    def reset(self, edges: Sequence[Relationship]) -> None:
        """Swap in a freshly built edge list and clear the hover state."""
        self._edges = list(edges)
        self._transition(NO_HIGHLIGHT)

    def hover_field(self, table: str, column: str) -> None:
        self._transition(HoveredField(table, column))

    def leave_field(self) -> None:
        # a late leave from a row must not clear an edge hover that replaced it
        if isinstance(self._state, HoveredField):
            self._transition(NO_HIGHLIGHT)

    def hover_edge(self, edge_id: str) -> None:
        self._transition(HoveredEdge(edge_id))

    def leave_edge(self) -> None:
        if isinstance(self._state, HoveredEdge):
            self._transition(NO_HIGHLIGHT)

    def clear(self) -> None:
        self._transition(NO_HIGHLIGHT)

    def is_edge_highlighted(self, edge_id: str) -> bool:
        return edge_id in self._emphasis.edges

    def edge_style(self, edge_id: str) -> EdgeStyle:
        if self.is_edge_highlighted(edge_id):
            return HIGHLIGHTED_EDGE_STYLE
        return DEFAULT_EDGE_STYLE

    def highlighted_columns(self, table: str) -> FrozenSet[str]:
        return self._emphasis.columns_of(table)

    def _transition(self, state: HighlightState) -> None:
        self._state = state
        self._emphasis = derive_emphasis(state, self._edges)
        logger.debug(
            f"Highlight {state.kind}: {len(self._emphasis.edges)} edges, "
            f"{len(self._emphasis.fields)} fields"
        )
