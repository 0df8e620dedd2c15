"""Basic tests for erdiagram."""

import pytest

from erdiagram import DiagramSession


def test_orders_customers_end_to_end(orders_snapshot):
    """Load, hover and render the two-table example."""
    session = DiagramSession()
    session.load(orders_snapshot)
    session.hover_field("Orders", "customer_id")

    frame = session.render()

    assert [node["id"] for node in frame.nodes] == ["Orders", "Customers"]
    assert len(frame.edges) == 1
    edge = frame.edges[0]
    assert edge.is_highlighted
    assert edge.route.points[0].x == 260.0
    assert edge.route.points[-1].x == 442.0
    assert frame.viewport is not None


def test_version():
    """Test version is set."""
    from erdiagram import __version__

    assert __version__ == "0.1.0"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
