"""Serve command for starting the API server."""

from __future__ import annotations

import click
import uvicorn

from erdiagram.utils.config import get_config
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)


@click.command(name="serve")
@click.option(
    "--host",
    help="Host to bind to (default: api.host from config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    help="Port to bind to (default: api.port from config)",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (development mode)",
)
def serve_cmd(host, port, reload):
    """Start the FastAPI server exposing the diagram engine.

    \b
    Examples:
        # Start server
        erdiagram serve

        # Custom host and port
        erdiagram serve --host localhost --port 8080
    """
    config = get_config()
    host = host or config.get("api.host", "0.0.0.0")
    port = port or int(config.get("api.port", 8000))

    click.echo("🚀 Starting erdiagram API server...")
    click.echo(f"   Host: {host}")
    click.echo(f"   Port: {port}")

    try:
        if reload:
            uvicorn.run(
                "erdiagram.api.server:create_app",
                factory=True,
                host=host,
                port=port,
                reload=True,
                log_level="info",
            )
        else:
            from erdiagram.api.server import create_app

            uvicorn.run(create_app(), host=host, port=port, log_level="info")
    except Exception as e:
        logger.exception("Server failed")
        click.echo(f"❌ Server failed: {e}", err=True)
        raise click.Abort()
