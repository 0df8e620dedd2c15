"""Error handling decorators for CLI commands."""

from __future__ import annotations

import signal
import sys
from functools import wraps

import click

from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)

# Handle SIGPIPE gracefully when output is piped to head and friends
try:
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)
except AttributeError:
    # Windows doesn't have SIGPIPE
    pass


def handle_errors(f):
    """Decorator to handle common errors in CLI commands.

    Catches exceptions and displays user-friendly error messages,
    then aborts the command gracefully.

    Example:
        @click.command()
        @handle_errors
        def my_command():
            ...
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except click.Abort:
            raise
        except BrokenPipeError:
            devnull = open("/dev/null", "w")
            sys.stdout = devnull
            sys.stderr = devnull
            sys.exit(0)
        except FileNotFoundError as e:
            click.echo(f"❌ File not found: {e}", err=True)
            raise click.Abort()
        except PermissionError as e:
            click.echo(f"❌ Permission denied: {e}", err=True)
            raise click.Abort()
        except ValueError as e:
            click.echo(f"❌ Invalid value: {e}", err=True)
            logger.debug("ValueError details", exc_info=True)
            raise click.Abort()
        except KeyError as e:
            click.echo(f"❌ Not found in diagram: {e}", err=True)
            logger.debug("KeyError details", exc_info=True)
            raise click.Abort()
        except Exception as e:
            click.echo(f"❌ Unexpected error: {e}", err=True)
            logger.exception("Unexpected error in command")
            raise click.Abort()

    return wrapper
