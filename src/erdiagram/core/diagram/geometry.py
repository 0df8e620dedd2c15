"""Orthogonal polyline geometry shared by the router and the path renderer."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from erdiagram.core.diagram.model import Point, Rect

# Coordinates closer than this are treated as equal.
EPSILON = 0.1


def segment_intersects_rect(a: Point, b: Point, rect: Rect) -> bool:
    """Whether an axis-aligned segment touches a rectangle (borders inclusive).

    Diagonal segments never occur in orthogonal routes and are reported as
    non-intersecting.
    """
    if abs(a.x - b.x) < EPSILON:
        if a.x < rect.x or a.x > rect.right:
            return False
        return max(a.y, b.y) >= rect.y and min(a.y, b.y) <= rect.bottom

    if abs(a.y - b.y) < EPSILON:
        if a.y < rect.y or a.y > rect.bottom:
            return False
        return max(a.x, b.x) >= rect.x and min(a.x, b.x) <= rect.right

    return False


def manhattan(a: Point, b: Point) -> float:
    return abs(b.x - a.x) + abs(b.y - a.y)


def polyline_length(points: Sequence[Point]) -> float:
    """Total Manhattan length of a polyline."""
    return sum(manhattan(points[i], points[i + 1]) for i in range(len(points) - 1))


def _is_collinear(a: Point, b: Point, c: Point) -> bool:
    vertical = abs(a.x - b.x) < EPSILON and abs(b.x - c.x) < EPSILON
    horizontal = abs(a.y - b.y) < EPSILON and abs(b.y - c.y) < EPSILON
    return vertical or horizontal


def simplify_polyline(points: Sequence[Point]) -> List[Point]:
    """Drop zero-length segments and merge consecutive collinear segments.

    Endpoints are always kept; a fully degenerate polyline collapses to its
    two endpoints.
    """
    if len(points) < 2:
        return list(points)

    deduped: List[Point] = [points[0]]
    for point in points[1:]:
        if manhattan(deduped[-1], point) >= EPSILON:
            deduped.append(point)
    if len(deduped) == 1:
        return [points[0], points[-1]]
    # keep the exact final coordinates even when the last hop was sub-epsilon
    deduped[-1] = points[-1]

    merged: List[Point] = [deduped[0]]
    for i in range(1, len(deduped) - 1):
        if not _is_collinear(merged[-1], deduped[i], deduped[i + 1]):
            merged.append(deduped[i])
    merged.append(deduped[-1])
    return merged


def bend_count(points: Sequence[Point]) -> int:
    """Number of direction changes of a polyline."""
    return max(0, len(simplify_polyline(points)) - 2)


def bounding_rect(rects: Iterable[Rect]) -> Optional[Rect]:
    """Smallest rectangle covering every rectangle, or None for no input."""
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    for rect in rects:
        min_x = min(min_x, rect.x)
        min_y = min(min_y, rect.y)
        max_x = max(max_x, rect.right)
        max_y = max(max_y, rect.bottom)
    if min_x == float("inf"):
        return None
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)
