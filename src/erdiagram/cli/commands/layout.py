"""Layout command: positioned nodes for a schema snapshot."""

from __future__ import annotations

import click

from erdiagram.cli.decorators import handle_errors, with_output_file, with_snapshot
from erdiagram.cli.handlers import DiagramHandler
from erdiagram.cli.output import OutputFormatter
from erdiagram.utils.config import get_config
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)
out = OutputFormatter()


@click.command(name="layout")
@with_snapshot
@with_output_file
@handle_errors
def layout_cmd(snapshot, output):
    """Lay out every table of SNAPSHOT and print the positioned nodes.

    SNAPSHOT is a JSON snapshot file or a directory holding tables.csv,
    columns.csv and foreign_keys.csv.

    \b
    Examples:
        # Print positions as JSON
        erdiagram layout schema.json

        # Save to a file
        erdiagram layout ./metadata -o layout.json
    """
    handler = DiagramHandler(get_config())
    result = handler.layout(snapshot)

    out.success(result["status"])
    out.write_json(result, output)
