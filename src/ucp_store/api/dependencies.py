"""FastAPI dependency wiring.

Routers depend on ``get_engine``; ``create_app`` overrides it with the
engine it builds, and tests override it with isolated engines.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header

from ..capabilities.checkout import CheckoutEngine
from ..discovery import UCP_SUPPORTED_VERSIONS, validate_ucp_version
from ..exceptions import UCPStoreException, UnsupportedUCPVersionError

logger = logging.getLogger(__name__)

UCP_VERSION_HEADER = "UCP-Version"


class EngineNotConfiguredError(UCPStoreException):
    """No checkout engine has been wired into the application."""

    error_code = "SERVICE_UNAVAILABLE"
    http_status = 503

    def __init__(self) -> None:
        super().__init__("Checkout engine is not configured")


def get_engine() -> CheckoutEngine:
    raise EngineNotConfiguredError()


def require_supported_ucp_version(
    ucp_version: Optional[str] = Header(default=None, alias=UCP_VERSION_HEADER),
) -> None:
    """Reject agents that declare a protocol version the store does not speak.

    Agents that send no version are served with the store's own version.
    """
    valid, reason = validate_ucp_version(ucp_version or "")
    if not valid:
        logger.info(f"Rejected agent request: {reason}")
        raise UnsupportedUCPVersionError(ucp_version, list(UCP_SUPPORTED_VERSIONS))


__all__ = [
    "UCP_VERSION_HEADER",
    "EngineNotConfiguredError",
    "get_engine",
    "require_supported_ucp_version",
]
