"""Command-line interface for erdiagram."""
