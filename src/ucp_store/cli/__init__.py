"""Command-line interface for the UCP store."""

from .main import cli

__all__ = ["cli"]
