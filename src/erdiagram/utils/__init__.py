"""Utility helpers for erdiagram."""
