"""CLI decorators for common options and error handling."""

from erdiagram.cli.decorators.error_handling import handle_errors
from erdiagram.cli.decorators.options import (
    with_canvas_size,
    with_output_file,
    with_snapshot,
)

__all__ = [
    "handle_errors",
    "with_canvas_size",
    "with_output_file",
    "with_snapshot",
]
