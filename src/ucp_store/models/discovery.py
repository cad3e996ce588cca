"""UCP discovery document models.

Served at ``/.well-known/ucp`` so agents can learn the protocol version,
where the shopping service lives and which capabilities it implements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True, slots=True)
class UCPCapability:
    """A named, versioned feature the store declares support for."""

    name: str
    version: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "version": self.version}


@dataclass(frozen=True, slots=True)
class UCPService:
    """A UCP service and the REST endpoint that serves it."""

    name: str
    version: str
    endpoint: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "rest": {"endpoint": self.endpoint},
        }


@dataclass(frozen=True, slots=True)
class DiscoveryDescriptor:
    """Static capability document for the store."""

    version: str
    services: Tuple[UCPService, ...] = ()
    capabilities: Tuple[UCPCapability, ...] = field(default_factory=tuple)

    def service(self, name: str) -> UCPService | None:
        for svc in self.services:
            if svc.name == name:
                return svc
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``{"ucp": {...}}`` wire document."""
        return {
            "ucp": {
                "version": self.version,
                "services": {svc.name: svc.to_dict() for svc in self.services},
                "capabilities": [cap.to_dict() for cap in self.capabilities],
            }
        }


__all__ = ["UCPCapability", "UCPService", "DiscoveryDescriptor"]
