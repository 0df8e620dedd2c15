"""Tests for the FastAPI server."""

import pytest
from fastapi.testclient import TestClient

from erdiagram import __version__
from erdiagram.api.server import create_app

ORDERS_EDGE = "Orders.customer_id->Customers.id::fk_orders_customer"


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def snapshot_payload(orders_snapshot):
    return orders_snapshot.to_dict()


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == __version__
    assert data["endpoints"]["render"] == "/api/v1/diagram/render"


def test_health_reports_timings(client, snapshot_payload):
    client.post("/api/v1/diagram/layout", json={"snapshot": snapshot_payload})

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "diagram.load" in data["timings"]


def test_layout_endpoint(client, snapshot_payload):
    response = client.post("/api/v1/diagram/layout", json={"snapshot": snapshot_payload})

    assert response.status_code == 200
    data = response.json()
    positions = {node["id"]: (node["x"], node["y"]) for node in data["nodes"]}
    assert positions == {"Orders": (0.0, 0.0), "Customers": (450.0, 0.0)}
    assert data["edges"][0]["id"] == ORDERS_EDGE


def test_render_endpoint_with_field_hover(client, snapshot_payload):
    response = client.post(
        "/api/v1/diagram/render",
        json={
            "snapshot": snapshot_payload,
            "hover_field": {"table": "Orders", "column": "customer_id"},
            "canvas_width": 1280,
            "canvas_height": 800,
        },
    )

    assert response.status_code == 200
    data = response.json()
    edge = data["edges"][0]
    assert edge["isHighlighted"] is True
    assert edge["style"]["strokeDasharray"] == "6 4"
    assert edge["svgPathString"].startswith("M 260 75")
    assert data["highlight"]["kind"] == "field"
    assert data["viewport"]["zoom"] == pytest.approx(1280 / (710 * 1.26))


def test_render_endpoint_with_edge_hover(client, snapshot_payload):
    response = client.post(
        "/api/v1/diagram/render",
        json={"snapshot": snapshot_payload, "hover_edge": ORDERS_EDGE},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["highlight"] == {"kind": "edge", "id": ORDERS_EDGE}
    assert data["edges"][0]["style"]["stroke"] == "#1e74ff"


def test_render_rejects_two_hovers(client, snapshot_payload):
    response = client.post(
        "/api/v1/diagram/render",
        json={
            "snapshot": snapshot_payload,
            "hover_field": {"table": "Orders", "column": "customer_id"},
            "hover_edge": ORDERS_EDGE,
        },
    )

    assert response.status_code == 400


def test_invalid_requests(client, snapshot_payload):
    missing_tables = client.post("/api/v1/diagram/layout", json={"snapshot": {"columns": []}})
    bad_canvas = client.post(
        "/api/v1/diagram/render",
        json={"snapshot": snapshot_payload, "canvas_width": 0},
    )

    assert missing_tables.status_code == 422
    assert bad_canvas.status_code == 422


def test_empty_snapshot(client):
    response = client.post("/api/v1/diagram/render", json={"snapshot": {"tables": []}})

    assert response.status_code == 200
    data = response.json()
    assert data["nodes"] == []
    assert data["viewport"] is None
