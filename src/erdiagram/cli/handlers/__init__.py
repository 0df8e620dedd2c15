"""CLI command handlers containing business logic."""

from erdiagram.cli.handlers.diagram_handler import DiagramHandler

__all__ = ["DiagramHandler"]
