"""Output formatting utilities for CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import click


class OutputFormatter:
    """Format output for CLI display.

    Human-readable messages go to stderr so that JSON written to stdout can
    be piped straight into another tool.

    Example:
        >>> out = OutputFormatter()
        >>> out.success("Layout computed")
        >>> out.stats({"tables": 5, "relations": 4})
    """

    @staticmethod
    def success(message: str) -> None:
        click.echo(f"✓ {message}", err=True)

    @staticmethod
    def error(message: str, abort: bool = False) -> None:
        """Display error message.

        Args:
            message: Error message to display
            abort: Whether to abort command execution after displaying error
        """
        click.echo(f"❌ {message}", err=True)
        if abort:
            raise click.Abort()

    @staticmethod
    def warning(message: str) -> None:
        click.echo(f"⚠️  {message}", err=True)

    @staticmethod
    def section(title: str) -> None:
        click.echo(f"\n{title}", err=True)

    @staticmethod
    def stats(stats_dict: Dict[str, Any], indent: str = "   ") -> None:
        """Display statistics dictionary in key: value format.

        Args:
            stats_dict: Dictionary of statistics to display
            indent: Indentation string for each line
        """
        for key, value in stats_dict.items():
            click.echo(f"{indent}{key}: {value}", err=True)

    @staticmethod
    def list_items(items: List[str], indent: str = "   ", bullet: str = "-") -> None:
        for item in items:
            click.echo(f"{indent}{bullet} {item}", err=True)

    @staticmethod
    def write_json(data: Any, output: Optional[str] = None) -> None:
        """Write ``data`` as JSON to ``output``, or to stdout when not given."""
        text = json.dumps(data, indent=2, ensure_ascii=False)
        if output:
            path = Path(output)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text + "\n", encoding="utf-8")
            click.echo(f"✓ Wrote {path}", err=True)
        else:
            click.echo(text)
