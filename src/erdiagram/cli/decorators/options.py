"""Common CLI option decorators."""

from __future__ import annotations

import click


def with_snapshot(f):
    """Add the SNAPSHOT argument: a JSON snapshot file or a CSV directory.

    Example:
        @click.command()
        @with_snapshot
        def my_command(snapshot):
            pass
    """
    return click.argument(
        "snapshot",
        type=click.Path(exists=True),
    )(f)


def with_output_file(f):
    """Add --output option to command.

    Example:
        @click.command()
        @with_output_file
        def my_command(output):
            pass
    """
    return click.option(
        "--output",
        "-o",
        type=click.Path(),
        help="Write JSON to this file instead of stdout",
    )(f)


def with_canvas_size(f):
    """Add --width/--height options for the visible canvas."""
    f = click.option(
        "--height",
        type=click.FloatRange(min=0, min_open=True),
        help="Canvas height in pixels (default: diagram.viewport.canvas_height)",
    )(f)
    f = click.option(
        "--width",
        type=click.FloatRange(min=0, min_open=True),
        help="Canvas width in pixels (default: diagram.viewport.canvas_width)",
    )(f)
    return f
