"""CLI entry point for erdiagram."""

from __future__ import annotations

import click

from erdiagram import __version__
from erdiagram.cli.commands import fit, hover, layout, render, serve
from erdiagram.utils.config import load_config
from erdiagram.utils.logging import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to config.yml file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level",
)
@click.pass_context
def cli(ctx, config, log_level):
    """erdiagram - Schema relationship diagram engine.

    \b
    Examples:
        # Positioned nodes
        erdiagram layout schema.json

        # Routed edges with a hovered column
        erdiagram render schema.json --hover-field Orders.customer_id

        # Camera fit for a canvas
        erdiagram fit schema.json --width 1280 --height 800

        # HTTP API
        erdiagram serve --port 8080
    """
    ctx.ensure_object(dict)

    setup_logging(level=log_level)

    if config:
        ctx.obj["config"] = load_config(config)


cli.add_command(layout.layout_cmd)
cli.add_command(render.render_cmd)
cli.add_command(fit.fit_cmd)
cli.add_command(hover.hover_cmd)
cli.add_command(serve.serve_cmd)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
