"""Tests for the orthogonal router."""

import pytest

from erdiagram.core.diagram.builder import SchemaGraphBuilder
from erdiagram.core.diagram.geometry import segment_intersects_rect
from erdiagram.core.diagram.layout import LayeredLayoutEngine
from erdiagram.core.diagram.model import Point, Rect, Relationship, Side, TableNode
from erdiagram.core.diagram.router import (
    Anchor,
    OrthogonalRouter,
    assign_route_biases,
    choose_sides,
    collect_obstacles,
    column_anchor,
    edge_hash,
    jitter_lane,
)
from erdiagram.core.diagram.settings import NodeSettings, RoutingSettings


def _laid_out(snapshot):
    graph = SchemaGraphBuilder().build(snapshot)
    nodes = LayeredLayoutEngine().apply(graph.nodes, graph.edges)
    return {n.id: n for n in nodes}, graph.edges


def _edge(source, target, edge_id=None):
    return Relationship(
        id=edge_id or f"{source}.x->{target}.id::fk",
        source_table=source,
        source_column="x",
        target_table=target,
        target_column="id",
        constraint_name="",
        label="",
    )


def test_edge_hash_matches_java_string_hash():
    assert edge_hash("") == 0
    assert edge_hash("a") == 97
    assert edge_hash("hello") == 99162322


def test_edge_hash_wraps_to_32_bits():
    """Overflow wraps like a signed 32-bit int before the absolute value."""
    assert edge_hash("polygenelubricants") == 2 ** 31
    assert edge_hash("x" * 200) < 2 ** 31 + 1


def test_jitter_lane_range():
    lanes = {jitter_lane(f"t.c{i}->u.id::fk") for i in range(50)}
    assert lanes <= {-1, 0, 1}
    assert len(lanes) > 1
    assert jitter_lane("a") == 0


def test_route_bias_is_symmetric_per_source_group():
    nodes = {
        name: TableNode(name, (), 260, 100, Point(0, y))
        for name, y in [("src", 0), ("t1", 400), ("t2", 0), ("t3", 800), ("other", 0)]
    }
    edges = [_edge("src", "t1"), _edge("src", "t3"), _edge("src", "t2"), _edge("other", "t1")]

    biases = assign_route_biases(edges, nodes)

    assert biases[edges[2].id] == -1
    assert biases[edges[0].id] == 0
    assert biases[edges[1].id] == 1
    assert biases[edges[3].id] == 0


def test_route_bias_for_two_edges():
    nodes = {
        name: TableNode(name, (), 260, 100, Point(0, y))
        for name, y in [("src", 0), ("a", 0), ("b", 300)]
    }
    edges = [_edge("src", "b"), _edge("src", "a")]

    biases = assign_route_biases(edges, nodes)

    assert biases == {edges[1].id: -0.5, edges[0].id: 0.5}


def test_choose_sides_faces_the_other_node():
    left = TableNode("l", (), 260, 100, Point(0, 0))
    right = TableNode("r", (), 260, 100, Point(600, 0))

    assert choose_sides(left, right) == (Side.RIGHT, Side.LEFT)
    assert choose_sides(right, left) == (Side.LEFT, Side.RIGHT)
    assert choose_sides(left, left) == (Side.RIGHT, Side.LEFT)


def test_column_anchor_row_middle(orders_snapshot):
    nodes, _ = _laid_out(orders_snapshot)
    settings = NodeSettings()

    anchor = column_anchor(nodes["Orders"], "customer_id", Side.RIGHT, settings)
    assert anchor.point == Point(260, 36 + 26 + 13)

    anchor = column_anchor(nodes["Customers"], "id", Side.LEFT, settings)
    assert anchor.point == Point(450, 36 + 13)


def test_column_anchor_unknown_column_uses_header():
    node = TableNode("t", (), 260, 44, Point(10, 20))
    anchor = column_anchor(node, "missing", Side.LEFT, NodeSettings())

    assert anchor.point == Point(10, 20 + 18)


def test_collect_obstacles_filters_by_corridor():
    settings = RoutingSettings()
    geometry = [
        ("src", Rect(0, 0, 100, 100)),
        ("tgt", Rect(500, 0, 100, 100)),
        ("middle", Rect(250, 20, 100, 60)),
        ("far", Rect(5000, 5000, 100, 100)),
        ("collapsed", Rect(260, 30, 0, 0)),
    ]

    obstacles = collect_obstacles(
        "src", "tgt", Point(124, 50), Point(476, 50), geometry, settings
    )

    assert obstacles == (Rect(238, 8, 124, 84),)


def test_orders_customers_route(orders_snapshot):
    """A free path takes the horizontal mid-split with stubs at both ends."""
    nodes, edges = _laid_out(orders_snapshot)
    router = OrthogonalRouter()

    points = router.route_edge(edges[0], nodes, [(k, n.rect) for k, n in nodes.items()], NodeSettings())

    assert points == (
        Point(260, 75),
        Point(284, 75),
        Point(355, 75),
        Point(355, 49),
        Point(426, 49),
        Point(442, 49),
    )


def test_exactly_eight_candidates():
    router = OrthogonalRouter()
    source = Anchor(Point(100, 50), Side.RIGHT)
    target = Anchor(Point(500, 300), Side.LEFT)

    candidates = router.candidates("e", source, target, [], 0)

    assert len(candidates) == 8
    for candidate in candidates:
        assert candidate.points[0] == source.point
        assert candidate.points[1] == Point(124, 50)
        assert candidate.points[-2] == Point(476, 300)
        assert candidate.points[-1] == Point(492, 300)


def test_route_avoids_obstacle():
    """An obstacle on the straight corridor pushes the route to a clear lane."""
    router = OrthogonalRouter()
    source = Anchor(Point(100, 100), Side.RIGHT)
    target = Anchor(Point(600, 100), Side.LEFT)
    blocker = Rect(300, 0, 100, 200)

    points = router.route("e", source, target, [blocker], 0)

    for a, b in zip(points, points[1:]):
        assert not segment_intersects_rect(a, b, blocker)


def test_chosen_route_has_fewest_intersections(shop_snapshot):
    """No candidate of an edge crosses fewer obstacles than the chosen one."""
    nodes, edges = _laid_out(shop_snapshot)
    router = OrthogonalRouter()
    settings = NodeSettings()
    geometry = [(k, n.rect) for k, n in nodes.items()]
    biases = assign_route_biases(edges, nodes)

    for edge in edges:
        source_side, target_side = choose_sides(nodes[edge.source_table], nodes[edge.target_table])
        source = column_anchor(nodes[edge.source_table], edge.source_column, source_side, settings)
        target = column_anchor(nodes[edge.target_table], edge.target_column, target_side, settings)
        obstacles = collect_obstacles(
            edge.source_table,
            edge.target_table,
            source.step(router.settings.stub),
            target.step(router.settings.stub),
            geometry,
            router.settings,
        )

        candidates = router.candidates(edge.id, source, target, obstacles, biases[edge.id])
        chosen = router.route(edge.id, source, target, obstacles, biases[edge.id])
        chosen_candidate = next(c for c in candidates if c.points == chosen)

        assert all(chosen_candidate.intersections <= c.intersections for c in candidates)
        assert all(
            chosen_candidate.score <= c.score
            for c in candidates
            if c.intersections == chosen_candidate.intersections
        )


def test_congested_routing_still_returns_a_route():
    """When every candidate is blocked the cheapest one is still returned."""
    router = OrthogonalRouter()
    source = Anchor(Point(100, 100), Side.RIGHT)
    target = Anchor(Point(600, 100), Side.LEFT)
    wall = Rect(-5000, -5000, 20000, 20000)

    points = router.route("e", source, target, [wall], 0)
    candidates = router.candidates("e", source, target, [wall], 0)

    assert len(points) == 6
    assert points == min(candidates, key=lambda c: (c.intersections, c.score)).points


def test_ties_keep_earliest_candidate():
    """With no obstacles and no bias offset, the mid-split wins its tie with the biased copy."""
    router = OrthogonalRouter(RoutingSettings(jitter_step=0))
    source = Anchor(Point(0, 0), Side.RIGHT)
    target = Anchor(Point(400, 200), Side.LEFT)

    candidates = router.candidates("e", source, target, [], 0)
    assert candidates[0].points == candidates[2].points

    assert router.route("e", source, target, [], 0) == candidates[0].points


def test_degenerate_anchors_give_finite_route():
    """Coincident anchors collapse to a short valid stub."""
    router = OrthogonalRouter()
    anchor = Anchor(Point(50, 50), Side.RIGHT)

    points = router.route("e", anchor, anchor, [], 0)

    assert len(points) == 6
    assert all(abs(p.x) < 1e6 and abs(p.y) < 1e6 for p in points)


def test_routes_are_memoized_but_pure():
    router = OrthogonalRouter(RoutingSettings(cache_size=4))
    source = Anchor(Point(0, 0), Side.RIGHT)
    target = Anchor(Point(400, 200), Side.LEFT)

    first = router.route("e", source, target, [], 0)
    second = router.route("e", source, target, [], 0)

    assert first == second
    assert router.cache_info().hits == 1

    for i in range(10):
        router.route("e", source, Anchor(Point(400 + i, 200), Side.LEFT), [], 0)
    assert router.cache_info().currsize <= 4

    router.clear_cache()
    assert router.route("e", source, target, [], 0) == first


@pytest.mark.parametrize("bias", [-1, 0, 1])
def test_bias_shifts_only_the_biased_candidates(bias):
    router = OrthogonalRouter(RoutingSettings(jitter_step=0))
    source = Anchor(Point(0, 0), Side.RIGHT)
    target = Anchor(Point(400, 200), Side.LEFT)

    candidates = router.candidates("e", source, target, [], bias)
    mid_x = candidates[0].points[2].x

    assert candidates[2].points[2].x == mid_x + bias * 28
