"""Obstacle-avoiding orthogonal routing of relationship edges.

Each edge gets eight candidate polylines (two mid-splits, the same two
shifted by the edge's lane bias, four detours around the obstacle field).
Every candidate is scored and the cheapest one is drawn. Routing is a pure
function of the anchors, the obstacles and the bias, so it can run on every
drag frame; results are memoized in a bounded LRU cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from erdiagram.core.diagram.geometry import (
    bend_count,
    polyline_length,
    segment_intersects_rect,
)
from erdiagram.core.diagram.model import Point, Rect, Relationship, Side, TableNode
from erdiagram.core.diagram.settings import NodeSettings, RoutingSettings
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Anchor:
    """Where an edge meets a node border, and which border it is."""

    point: Point
    side: Side

    def step(self, distance: float) -> Point:
        """Point ``distance`` away from the border, outside the node."""
        return self.point.offset(self.side.direction * distance, 0)


@dataclass(frozen=True)
class Candidate:
    """A scored candidate route."""

    points: Tuple[Point, ...]
    intersections: int
    length: float
    bends: int
    score: float


def edge_hash(edge_id: str) -> int:
    """31-multiplier string hash over UTF-16 code units, wrapped to a signed
    32-bit integer, returned as its absolute value."""
    data = edge_id.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def jitter_lane(edge_id: str) -> int:
    """-1, 0 or +1, derived from the edge id."""
    return edge_hash(edge_id) % 3 - 1


def assign_route_biases(
    edges: Sequence[Relationship], nodes: Mapping[str, TableNode]
) -> Dict[str, float]:
    """Fan out edges leaving the same table.

    Edges are grouped by source table and sorted by the vertical centre of
    their target; offsets are symmetric around the group median
    (three edges get -1, 0, +1; two edges get -0.5, +0.5).
    """
    groups: Dict[str, List[Relationship]] = {}
    for edge in edges:
        groups.setdefault(edge.source_table, []).append(edge)

    def target_centre(edge: Relationship) -> float:
        node = nodes.get(edge.target_table)
        return node.center.y if node else 0.0

    biases: Dict[str, float] = {}
    for group in groups.values():
        ordered = sorted(group, key=target_centre)
        middle = (len(ordered) - 1) / 2
        for index, edge in enumerate(ordered):
            biases[edge.id] = index - middle
    return biases


def choose_sides(source: TableNode, target: TableNode) -> Tuple[Side, Side]:
    """Borders facing each other, picked by the nodes' horizontal centres."""
    if source.center.x <= target.center.x:
        return Side.RIGHT, Side.LEFT
    return Side.LEFT, Side.RIGHT


def column_anchor(
    node: TableNode, column_name: str, side: Side, settings: NodeSettings
) -> Anchor:
    """Anchor at the vertical middle of a column's row.

    Unknown columns anchor at the middle of the header.
    """
    index = node.column_index(column_name)
    if index is None:
        y = node.position.y + settings.header_height / 2
    else:
        y = (
            node.position.y
            + settings.header_height
            + index * settings.row_height
            + settings.row_height / 2
        )
    x = node.position.x if side is Side.LEFT else node.position.x + node.width
    return Anchor(Point(x, y), side)


def collect_obstacles(
    source_id: str,
    target_id: str,
    source_stub: Point,
    target_stub: Point,
    geometry: Iterable[Tuple[str, Rect]],
    settings: RoutingSettings,
) -> Tuple[Rect, ...]:
    """Padded boxes of the other nodes that reach into the edge's corridor."""
    margin = settings.corridor_margin
    corridor = Rect(
        min(source_stub.x, target_stub.x) - margin,
        min(source_stub.y, target_stub.y) - margin,
        abs(target_stub.x - source_stub.x) + margin * 2,
        abs(target_stub.y - source_stub.y) + margin * 2,
    )
    obstacles = []
    for node_id, rect in geometry:
        if node_id == source_id or node_id == target_id:
            continue
        if rect.width <= 0 or rect.height <= 0:
            continue
        padded = rect.expanded(settings.obstacle_padding)
        if padded.intersects(corridor):
            obstacles.append(padded)
    return tuple(obstacles)


class OrthogonalRouter:
    """Pick the cheapest of eight orthogonal candidate routes per edge.

    A candidate's score is
    ``intersection_penalty * intersections + length + bend_penalty * bends``.
    Candidates are compared on intersection count first and score second,
    and ties keep the earlier candidate. Routing never fails: in a congested
    drawing the least bad candidate is returned.
    """

    def __init__(self, settings: Optional[RoutingSettings] = None):
        self.settings = settings or RoutingSettings.from_config()
        self._cached_route = lru_cache(maxsize=self.settings.cache_size)(self._select)

    def candidates(
        self,
        edge_id: str,
        source: Anchor,
        target: Anchor,
        obstacles: Sequence[Rect],
        bias: float = 0.0,
    ) -> List[Candidate]:
        """All eight scored candidates, in generation order."""
        settings = self.settings
        start = source.point
        source_stub = source.step(settings.stub)
        target_stub = target.step(settings.stub)
        tip = target.step(settings.arrow_tip)

        min_x = min([start.x, target.point.x] + [r.x for r in obstacles])
        max_x = max([start.x, target.point.x] + [r.right for r in obstacles])
        min_y = min([start.y, target.point.y] + [r.y for r in obstacles])
        max_y = max([start.y, target.point.y] + [r.bottom for r in obstacles])

        mid_x = (source_stub.x + target_stub.x) / 2
        mid_y = (source_stub.y + target_stub.y) / 2
        offset = bias * settings.bias_step + jitter_lane(edge_id) * settings.jitter_step

        def via_x(x: float) -> Tuple[Point, ...]:
            return (
                start,
                source_stub,
                Point(x, source_stub.y),
                Point(x, target_stub.y),
                target_stub,
                tip,
            )

        def via_y(y: float) -> Tuple[Point, ...]:
            return (
                start,
                source_stub,
                Point(source_stub.x, y),
                Point(target_stub.x, y),
                target_stub,
                tip,
            )

        routes = [
            via_x(mid_x),
            via_y(mid_y),
            via_x(mid_x + offset),
            via_y(mid_y + offset),
            via_x(min_x - settings.outer_gap),
            via_x(max_x + settings.outer_gap),
            via_y(min_y - settings.outer_gap),
            via_y(max_y + settings.outer_gap),
        ]
        return [self._score(points, obstacles) for points in routes]

    def _score(self, points: Tuple[Point, ...], obstacles: Sequence[Rect]) -> Candidate:
        intersections = 0
        for a, b in zip(points, points[1:]):
            for rect in obstacles:
                if segment_intersects_rect(a, b, rect):
                    intersections += 1
        length = polyline_length(points)
        bends = bend_count(points)
        score = (
            intersections * self.settings.intersection_penalty
            + length
            + bends * self.settings.bend_penalty
        )
        return Candidate(points, intersections, length, bends, score)

    def _select(
        self,
        edge_id: str,
        source: Anchor,
        target: Anchor,
        obstacles: Tuple[Rect, ...],
        bias: float,
    ) -> Tuple[Point, ...]:
        best: Optional[Candidate] = None
        for candidate in self.candidates(edge_id, source, target, obstacles, bias):
            if best is None or (candidate.intersections, candidate.score) < (
                best.intersections,
                best.score,
            ):
                best = candidate
        if best.intersections:
            logger.debug(
                f"Edge {edge_id} routed through {best.intersections} obstacle crossings"
            )
        return best.points

    def route(
        self,
        edge_id: str,
        source: Anchor,
        target: Anchor,
        obstacles: Sequence[Rect],
        bias: float = 0.0,
    ) -> Tuple[Point, ...]:
        """Best polyline from the source border to the target arrow tip."""
        return self._cached_route(edge_id, source, target, tuple(obstacles), float(bias))

    def route_edge(
        self,
        edge: Relationship,
        nodes: Mapping[str, TableNode],
        geometry: Iterable[Tuple[str, Rect]],
        node_settings: NodeSettings,
        bias: float = 0.0,
    ) -> Tuple[Point, ...]:
        """Route one relationship against the current node geometry.

        Args:
            edge: Relationship to draw
            nodes: Current nodes by id (for anchors and side selection)
            geometry: Current ``(node_id, rect)`` pairs, as reported by the
                rendering layer
            node_settings: Header and row sizes used to place column anchors
            bias: Lane bias of the edge

        Returns:
            Chosen polyline
        """
        source_node = nodes[edge.source_table]
        target_node = nodes[edge.target_table]
        source_side, target_side = choose_sides(source_node, target_node)
        source = column_anchor(source_node, edge.source_column, source_side, node_settings)
        target = column_anchor(target_node, edge.target_column, target_side, node_settings)

        obstacles = collect_obstacles(
            edge.source_table,
            edge.target_table,
            source.step(self.settings.stub),
            target.step(self.settings.stub),
            geometry,
            self.settings,
        )
        return self.route(edge.id, source, target, obstacles, bias)

    def cache_info(self):
        return self._cached_route.cache_info()

    def clear_cache(self) -> None:
        self._cached_route.cache_clear()
