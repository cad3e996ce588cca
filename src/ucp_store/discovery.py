"""UCP discovery descriptor and protocol versioning."""

from __future__ import annotations

from typing import Iterable, Optional

from .models.discovery import DiscoveryDescriptor, UCPCapability, UCPService

# UCP Protocol Version (date-versioned)
UCP_PROTOCOL_VERSION = "2026-01-11"
UCP_SUPPORTED_VERSIONS = ["2026-01-11"]

SHOPPING_SERVICE = "dev.ucp.shopping"
CHECKOUT_CAPABILITY = "dev.ucp.shopping.checkout"

DEFAULT_CAPABILITIES = (
    UCPCapability(name=CHECKOUT_CAPABILITY, version=UCP_PROTOCOL_VERSION),
)


def validate_ucp_version(version: str) -> tuple[bool, str | None]:
    """Validate a UCP protocol version string.

    An empty version means "whatever the store speaks" and is accepted.
    """
    if not version:
        return True, None
    if version in UCP_SUPPORTED_VERSIONS:
        return True, None
    return False, f"ucp_version_unsupported:{version}"


def build_discovery(
    endpoint: str,
    version: str = UCP_PROTOCOL_VERSION,
    capabilities: Optional[Iterable[UCPCapability]] = None,
) -> DiscoveryDescriptor:
    """Build the store's discovery descriptor.

    Args:
        endpoint: Public base URL agents should send shopping requests to
        version: UCP protocol version the store implements
        capabilities: Declared capabilities (checkout only by default)
    """
    return DiscoveryDescriptor(
        version=version,
        services=(
            UCPService(name=SHOPPING_SERVICE, version=version, endpoint=endpoint.rstrip("/")),
        ),
        capabilities=tuple(capabilities) if capabilities is not None else DEFAULT_CAPABILITIES,
    )


__all__ = [
    "UCP_PROTOCOL_VERSION",
    "UCP_SUPPORTED_VERSIONS",
    "SHOPPING_SERVICE",
    "CHECKOUT_CAPABILITY",
    "DEFAULT_CAPABILITIES",
    "validate_ucp_version",
    "build_discovery",
]
