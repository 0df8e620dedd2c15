"""Fit command: camera pan and zoom for a canvas size."""

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

out = OutputFormatter()


@click.command(name="fit")
@with_snapshot
@with_canvas_size
@with_output_file
@handle_errors
def fit_cmd(snapshot, width, height, output):
    """Compute the viewport that frames SNAPSHOT on a WIDTH x HEIGHT canvas.

    \b
    Examples:
        erdiagram fit schema.json --width 1280 --height 800
    """
    handler = DiagramHandler(get_config())
    result = handler.fit(snapshot, width=width, height=height)

    if result is None:
        out.warning("Diagram has no tables, nothing to frame")
        out.write_json(None, output)
        return

    viewport = result["viewport"]
    out.stats(
        {
            "Focus tables": len(result["focus"]),
            "Zoom": round(viewport["zoom"], 3),
            "Full diagram": result["usedFullBounds"],
        }
    )
    out.write_json(result, output)
