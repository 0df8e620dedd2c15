"""Hover command: what lights up when a column is hovered."""

from __future__ import annotations

import click

from erdiagram.cli.decorators import handle_errors, with_output_file, with_snapshot
from erdiagram.cli.handlers import DiagramHandler
from erdiagram.cli.output import OutputFormatter
from erdiagram.utils.config import get_config

out = OutputFormatter()


@click.command(name="hover")
@with_snapshot
@click.argument("field", metavar="TABLE.COLUMN")
@with_output_file
@handle_errors
def hover_cmd(snapshot, field, output):
    """List the relationships and fields highlighted by hovering FIELD.

    \b
    Examples:
        erdiagram hover schema.json Orders.customer_id
    """
    handler = DiagramHandler(get_config())
    result = handler.hover(snapshot, field)

    out.section(f"Hovering {field}:")
    out.stats({"Edges": len(result["edges"]), "Fields": len(result["fields"])})
    out.list_items(result["edges"])
    out.write_json(result, output)
