"""Render command: node and edge descriptors for a rendering layer."""

from __future__ import annotations

import click

from erdiagram.cli.decorators import (
    handle_errors,
    with_canvas_size,
    with_output_file,
    with_snapshot,
)
from erdiagram.cli.handlers import DiagramHandler
from erdiagram.cli.output import OutputFormatter
from erdiagram.utils.config import get_config
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)
out = OutputFormatter()


@click.command(name="render")
@with_snapshot
@click.option(
    "--hover-field",
    metavar="TABLE.COLUMN",
    help="Render as if this column row were hovered",
)
@click.option(
    "--hover-edge",
    metavar="EDGE_ID",
    help="Render as if this relationship line were hovered",
)
@with_canvas_size
@with_output_file
@handle_errors
def render_cmd(snapshot, hover_field, hover_edge, width, height, output):
    """Route every relationship of SNAPSHOT and print render descriptors.

    Each edge carries its SVG path, label anchor, highlight flag and stroke
    style; each node lists its highlighted columns.

    \b
    Examples:
        # Plain render
        erdiagram render schema.json

        # Highlight everything touching Orders.customer_id
        erdiagram render schema.json --hover-field Orders.customer_id
    """
    handler = DiagramHandler(get_config())
    result = handler.render(
        snapshot,
        hover_field=hover_field,
        hover_edge=hover_edge,
        width=width,
        height=height,
    )

    highlighted = [edge["id"] for edge in result["edges"] if edge["isHighlighted"]]
    out.success(result["status"])
    if hover_field or hover_edge:
        out.stats({"Highlighted edges": len(highlighted)})
    out.write_json(result, output)
