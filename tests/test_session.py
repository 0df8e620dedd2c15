"""Tests for DiagramSession, the diagram view's event handlers."""

import itertools
import logging

import pytest

from erdiagram.core.diagram.highlight import NO_HIGHLIGHT, HoveredField
from erdiagram.core.diagram.session import DiagramSession
from erdiagram.core.schema import SchemaSnapshot

ORDERS_EDGE = "Orders.customer_id->Customers.id::fk_orders_customer"


@pytest.fixture
def session(orders_snapshot):
    session = DiagramSession()
    session.load(orders_snapshot)
    return session


def test_load_reports_status(orders_snapshot, caplog):
    session = DiagramSession()

    with caplog.at_level(logging.INFO, logger="erdiagram"):
        graph = session.load(orders_snapshot)

    assert len(graph.nodes) == 2
    assert len(graph.edges) == 1
    assert session.status.startswith("Loaded 2 tables, 1 relations in ")
    assert session.status.endswith(" ms")
    assert any("Loaded 2 tables" in record.getMessage() for record in caplog.records)


def test_load_fits_viewport(session):
    assert session.viewport is not None
    assert session.last_fit.focus_ids == ["Orders", "Customers"]


def test_orders_scenario_render(session):
    session.hover_field("Orders", "customer_id")
    frame = session.render()

    highlighted = [edge.id for edge in frame.edges if edge.is_highlighted]
    assert highlighted == [ORDERS_EDGE]

    nodes = {node["id"]: node for node in frame.nodes}
    assert nodes["Orders"]["highlightedColumns"] == ["customer_id"]
    assert nodes["Customers"]["highlightedColumns"] == ["id"]
    assert frame.highlight == HoveredField("Orders", "customer_id")


def test_render_descriptor_shape(session):
    data = session.render().to_dict()
    edge = data["edges"][0]

    assert edge["id"] == ORDERS_EDGE
    assert edge["svgPathString"].startswith("M 260 75")
    assert set(edge["labelAnchorPoint"]) == {"x", "y"}
    assert edge["isHighlighted"] is False
    assert edge["style"]["stroke"] == "#8a97ab"
    assert edge["label"] == "Orders.customer_id->Customers.id"

    node = data["nodes"][0]
    assert set(node) >= {"id", "x", "y", "width", "height", "columns", "highlightedColumns"}
    assert node["columns"][0] == {"name": "id", "type": "int", "keyType": "PRI"}
    assert data["highlight"] == {"kind": "none"}


def test_route_endpoints_within_stub_of_borders(shop_snapshot):
    """Every rendered path starts on its source border and ends near its target border."""
    session = DiagramSession()
    session.load(shop_snapshot)
    stub = session.router.settings.stub

    for descriptor in session.render().edges:
        source = session.node(descriptor.edge.source_table)
        target = session.node(descriptor.edge.target_table)
        first, last = descriptor.route.points[0], descriptor.route.points[-1]

        assert min(abs(first.x - source.rect.x), abs(first.x - source.rect.right)) <= stub
        assert source.rect.y <= first.y <= source.rect.bottom
        assert min(abs(last.x - target.rect.x), abs(last.x - target.rect.right)) <= stub
        assert target.rect.y <= last.y <= target.rect.bottom


def test_drag_moves_node_and_reroutes(session):
    before = session.render().edges[0].route.points[0]

    moved = session.drag_node("Orders", 0, 150)
    after = session.render().edges[0].route.points[0]

    assert moved.position.y == 150
    assert after.y == before.y + 150


def test_drag_keeps_biases(shop_snapshot):
    session = DiagramSession()
    session.load(shop_snapshot)
    biases = {edge.id: session.route_bias(edge.id) for edge in session.edges}

    session.drag_node("products", 0, 2000)

    assert {edge.id: session.route_bias(edge.id) for edge in session.edges} == biases


def test_drag_unknown_node(session):
    with pytest.raises(KeyError):
        session.drag_node("Nope", 1, 1)


def test_auto_layout_restores_positions(shop_snapshot):
    session = DiagramSession()
    session.load(shop_snapshot)
    initial = {node.id: node.position for node in session.nodes}

    session.drag_node("orders", 300, -40)
    session.drag_node("suppliers", -1000, 0)
    positions = session.auto_layout()

    assert positions == initial
    assert session.auto_layout() == initial


def test_layout_has_no_overlap(shop_snapshot):
    session = DiagramSession()
    session.load(shop_snapshot)

    for a, b in itertools.combinations(session.nodes, 2):
        assert not a.rect.intersects(b.rect)


def test_refresh_resets_highlight_and_keeps_ids(session, orders_snapshot):
    session.hover_edge(ORDERS_EDGE)
    ids = [edge.id for edge in session.edges]

    session.refresh(orders_snapshot)

    assert session.highlight.state is NO_HIGHLIGHT
    assert [edge.id for edge in session.edges] == ids


def test_leave_events(session):
    session.hover_field("Customers", "name")
    session.leave_field()
    assert session.highlight.state is NO_HIGHLIGHT

    session.hover_edge(ORDERS_EDGE)
    session.leave_edge()
    assert not session.render().edges[0].is_highlighted


def test_fit_and_resize(session):
    result = session.fit_viewport(640, 400)
    assert result.viewport is session.viewport

    resized = session.resize(2560, 1600)
    assert resized.viewport.zoom >= result.viewport.zoom

    with pytest.raises(ValueError):
        session.resize(0, 100)


def test_close_discards_everything(session):
    session.hover_field("Orders", "id")
    session.close()

    assert not session.is_loaded
    assert session.viewport is None
    assert session.render().edges == []
    assert session.fit_viewport() is None


def test_empty_snapshot():
    session = DiagramSession()
    graph = session.load(SchemaSnapshot(tables=[]))

    assert graph.nodes == []
    assert session.viewport is None
    assert session.status.startswith("Loaded 0 tables, 0 relations")
