"""CLI command modules."""

from . import fit, hover, layout, render, serve

__all__ = ["fit", "hover", "layout", "render", "serve"]
