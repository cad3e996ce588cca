"""HTTP API for the UCP store."""

from .main import build_engine, create_app

__all__ = ["build_engine", "create_app"]
