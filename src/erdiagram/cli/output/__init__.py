"""Output formatting for CLI."""

from erdiagram.cli.output.formatters import OutputFormatter

__all__ = ["OutputFormatter"]
