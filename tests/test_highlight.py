"""Tests for hover highlighting."""

from erdiagram.core.diagram.builder import SchemaGraphBuilder
from erdiagram.core.diagram.highlight import (
    DEFAULT_EDGE_STYLE,
    HIGHLIGHTED_EDGE_STYLE,
    NO_HIGHLIGHT,
    HighlightIndexer,
    HoveredEdge,
    HoveredField,
    derive_emphasis,
)

ORDERS_EDGE = "Orders.customer_id->Customers.id::fk_orders_customer"


def _indexer(snapshot):
    return HighlightIndexer(SchemaGraphBuilder().build(snapshot).edges)


def test_hover_fk_field_highlights_edge_and_both_ends(orders_snapshot):
    indexer = _indexer(orders_snapshot)
    indexer.hover_field("Orders", "customer_id")

    assert indexer.highlighted_edges == {ORDERS_EDGE}
    assert indexer.highlighted_fields == {("Orders", "customer_id"), ("Customers", "id")}


def test_hover_referenced_field(orders_snapshot):
    indexer = _indexer(orders_snapshot)
    indexer.hover_field("Customers", "id")

    assert indexer.highlighted_edges == {ORDERS_EDGE}
    assert indexer.highlighted_columns("Orders") == {"customer_id"}


def test_hover_unrelated_field(orders_snapshot):
    """A field without foreign keys lights up alone."""
    indexer = _indexer(orders_snapshot)
    indexer.hover_field("Customers", "name")

    assert indexer.highlighted_edges == frozenset()
    assert indexer.highlighted_fields == {("Customers", "name")}


def test_hover_edge(orders_snapshot):
    indexer = _indexer(orders_snapshot)
    indexer.hover_edge(ORDERS_EDGE)

    assert indexer.state == HoveredEdge(ORDERS_EDGE)
    assert indexer.is_edge_highlighted(ORDERS_EDGE)
    assert indexer.highlighted_fields == {("Orders", "customer_id"), ("Customers", "id")}
    assert indexer.edge_style(ORDERS_EDGE) == HIGHLIGHTED_EDGE_STYLE


def test_hover_states_are_exclusive(orders_snapshot):
    """Hovering an edge replaces a field hover and vice versa."""
    indexer = _indexer(orders_snapshot)

    indexer.hover_field("Customers", "name")
    indexer.hover_edge(ORDERS_EDGE)
    assert isinstance(indexer.state, HoveredEdge)
    assert ("Customers", "name") not in indexer.highlighted_fields

    indexer.hover_field("Customers", "name")
    assert indexer.state == HoveredField("Customers", "name")
    assert not indexer.is_edge_highlighted(ORDERS_EDGE)


def test_leave_clears(orders_snapshot):
    indexer = _indexer(orders_snapshot)

    indexer.hover_field("Orders", "customer_id")
    indexer.leave_field()
    assert indexer.state is NO_HIGHLIGHT
    assert indexer.highlighted_edges == frozenset()

    indexer.hover_edge(ORDERS_EDGE)
    indexer.leave_edge()
    assert indexer.state is NO_HIGHLIGHT


def test_stale_leave_keeps_newer_hover(orders_snapshot):
    """Leaving a field after an edge took over does not clear the edge."""
    indexer = _indexer(orders_snapshot)

    indexer.hover_field("Orders", "customer_id")
    indexer.hover_edge(ORDERS_EDGE)
    indexer.leave_field()

    assert indexer.state == HoveredEdge(ORDERS_EDGE)


def test_reset_clears_state(orders_snapshot, isolated_snapshot):
    indexer = _indexer(orders_snapshot)
    indexer.hover_field("Orders", "customer_id")

    indexer.reset(SchemaGraphBuilder().build(isolated_snapshot).edges)

    assert indexer.state is NO_HIGHLIGHT
    assert indexer.edge_style(ORDERS_EDGE) == DEFAULT_EDGE_STYLE


def test_hovered_edge_id_is_always_highlighted():
    emphasis = derive_emphasis(HoveredEdge("gone"), [])

    assert emphasis.edges == {"gone"}
    assert emphasis.fields == frozenset()


def test_field_shared_by_several_edges(shop_snapshot):
    indexer = _indexer(shop_snapshot)
    indexer.hover_field("orders", "id")

    assert indexer.highlighted_edges == {"order_items.order_id->orders.id::fk_items_order"}

    indexer.hover_field("products", "id")
    assert indexer.highlighted_edges == {
        "order_items.product_id->products.id::fk_items_product",
        "categories.featured_product_id->products.id::fk_categories_product",
    }
    assert indexer.highlighted_columns("categories") == {"featured_product_id"}


def test_styles():
    assert HIGHLIGHTED_EDGE_STYLE.to_dict() == {
        "stroke": "#1e74ff",
        "strokeWidth": 2.4,
        "strokeDasharray": "6 4",
        "animated": True,
    }
    assert DEFAULT_EDGE_STYLE.to_dict()["strokeDasharray"] is None
    assert NO_HIGHLIGHT.to_dict() == {"kind": "none"}
