"""HTTP client for UCP stores.

Speaks the same surface an agent would: discovery, product listing and the
checkout-session lifecycle.

Usage:
    with UCPStoreClient("http://localhost:3000") as client:
        session = client.create_checkout([("prod_coffee_latte", 2)])
        client.complete_checkout(session["id"])
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple
from urllib.parse import quote

import httpx

from .discovery import UCP_PROTOCOL_VERSION

logger = logging.getLogger(__name__)


def _session_path(session_id: str) -> str:
    # Session ids are opaque; escape them as a single path segment
    return f"/checkout-sessions/{quote(session_id, safe='')}"


class StoreAPIError(Exception):
    """Error response from a UCP store."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: Optional[str] = None,
        details: Any = None,
    ):
        self.status_code = status_code
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(f"[{status_code}] {message}")


class UCPStoreClient:
    """HTTP client for a UCP store."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        ucp_version: str = UCP_PROTOCOL_VERSION,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.ucp_version = ucp_version
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={"Content-Type": "application/json", "UCP-Version": self.ucp_version},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "UCPStoreClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _handle_response(self, response: httpx.Response) -> Dict[str, Any]:
        """Handle API response and raise errors if needed."""
        if response.status_code >= 400:
            try:
                error_data = response.json()
            except ValueError:
                raise StoreAPIError(response.status_code, response.text or "Unknown error") from None
            raise StoreAPIError(
                response.status_code,
                error_data.get("detail", error_data.get("message", "Unknown error")),
                error_code=error_data.get("error"),
                details=error_data.get("details"),
            )
        return response.json()

    def discover(self) -> Dict[str, Any]:
        """Fetch the store's ``/.well-known/ucp`` discovery document."""
        return self._handle_response(self.client.get("/.well-known/ucp"))

    def list_products(self) -> Dict[str, Any]:
        """List available products: ``{"products": [...], "total": n}``."""
        return self._handle_response(self.client.get("/products"))

    def create_checkout(
        self,
        items: Iterable[Tuple[str, int]],
        metadata: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Create a checkout session from ``(item_id, quantity)`` pairs."""
        body: Dict[str, Any] = {
            "line_items": [
                {"item": {"id": item_id}, "quantity": quantity}
                for item_id, quantity in items
            ]
        }
        if metadata:
            body["metadata"] = metadata
        logger.debug(f"Creating checkout: items={len(body['line_items'])}")
        return self._handle_response(self.client.post("/checkout-sessions", json=body))

    def get_checkout(self, session_id: str) -> Dict[str, Any]:
        return self._handle_response(self.client.get(_session_path(session_id)))

    def complete_checkout(self, session_id: str) -> Dict[str, Any]:
        """Complete (pay for) a session: ``{"success", "session", "message"}``."""
        return self._handle_response(self.client.post(f"{_session_path(session_id)}/complete"))

    def health(self) -> Dict[str, Any]:
        return self._handle_response(self.client.get("/health"))


__all__ = ["StoreAPIError", "UCPStoreClient"]
