"""Store API routers."""

from . import checkout_sessions, discovery, health, products

__all__ = ["checkout_sessions", "discovery", "health", "products"]
