"""Convert routed polylines into SVG path strings and label anchors."""

from __future__ import annotations

from typing import List, Optional, Sequence

from erdiagram.core.diagram.geometry import EPSILON, manhattan, simplify_polyline
from erdiagram.core.diagram.model import EdgeRoute, Point
from erdiagram.core.diagram.settings import RoutingSettings


def format_number(value: float) -> str:
    """Compact SVG number: at most two decimals, no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _coords(point: Point) -> str:
    return f"{format_number(point.x)} {format_number(point.y)}"


def _same_direction(prev: Point, curr: Point, after: Point) -> bool:
    dx1, dy1 = curr.x - prev.x, curr.y - prev.y
    dx2, dy2 = after.x - curr.x, after.y - curr.y
    horizontal = abs(dy1) < EPSILON and abs(dy2) < EPSILON
    vertical = abs(dx1) < EPSILON and abs(dx2) < EPSILON
    return horizontal or vertical


def _toward(origin: Point, other: Point, distance: float, length: float) -> Point:
    ratio = distance / length
    return Point(
        origin.x + (other.x - origin.x) * ratio,
        origin.y + (other.y - origin.y) * ratio,
    )


class PathRenderer:
    """Smooth an orthogonal polyline into an SVG path.

    Collinear runs are merged first; every remaining bend is replaced by a
    quadratic curve whose radius is clamped to half of the shorter adjacent
    segment, so short jogs never overshoot.

    Example:
        >>> renderer = PathRenderer(corner_radius=10)
        >>> renderer.svg_path([Point(0, 0), Point(40, 0), Point(40, 30)])
        'M 0 0 L 30 0 Q 40 0 40 10 L 40 30'
    """

    def __init__(self, corner_radius: Optional[float] = None):
        if corner_radius is None:
            corner_radius = RoutingSettings.from_config().corner_radius
        self.corner_radius = corner_radius

    def svg_path(self, points: Sequence[Point]) -> str:
        if not points:
            return ""
        simplified = simplify_polyline(points)
        if len(simplified) == 1:
            start = simplified[0]
            return f"M {_coords(start)} L {_coords(start)}"

        parts: List[str] = [f"M {_coords(simplified[0])}"]
        for i in range(1, len(simplified) - 1):
            prev, curr, after = simplified[i - 1], simplified[i], simplified[i + 1]
            in_len = manhattan(prev, curr)
            out_len = manhattan(curr, after)
            if in_len < EPSILON or out_len < EPSILON or _same_direction(prev, curr, after):
                parts.append(f"L {_coords(curr)}")
                continue

            radius = min(self.corner_radius, in_len / 2, out_len / 2)
            before = _toward(curr, prev, radius, in_len)
            beyond = _toward(curr, after, radius, out_len)
            parts.append(f"L {_coords(before)}")
            parts.append(f"Q {_coords(curr)} {_coords(beyond)}")

        parts.append(f"L {_coords(simplified[-1])}")
        return " ".join(parts)

    @staticmethod
    def label_anchor(points: Sequence[Point]) -> Point:
        """Point at half of the polyline's Manhattan length.

        Degenerate polylines (one point, or zero length) anchor at the first
        point.
        """
        if not points:
            return Point(0.0, 0.0)
        segments = list(zip(points, points[1:]))
        total = sum(manhattan(a, b) for a, b in segments)
        if total < EPSILON:
            return points[0]

        half = total / 2
        walked = 0.0
        for a, b in segments:
            length = manhattan(a, b)
            if length > 0 and walked + length >= half:
                return _toward(a, b, half - walked, length)
            walked += length
        return points[-1]

    def render(self, edge_id: str, points: Sequence[Point]) -> EdgeRoute:
        return EdgeRoute(
            edge_id=edge_id,
            points=tuple(points),
            svg_path=self.svg_path(points),
            label_anchor=self.label_anchor(points),
        )
