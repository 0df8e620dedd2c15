"""HTTP API for erdiagram."""
