"""Exception hierarchy for the UCP store.

All store exceptions inherit from UCPStoreException, enabling:
- Consistent error handling between the checkout engine and the HTTP layer
- HTTP status code mapping in the API
- Structured error responses with machine-readable error codes

Errors fall into three families:
- client input errors (bad cart contents), reported back to the caller
- state conflicts (unknown session, double completion)
- internal invariant violations, which abort the single operation

Usage:
    from ucp_store.exceptions import ProductNotFoundError

    try:
        engine.create_checkout(items)
    except ProductNotFoundError as e:
        print(e.details["item_id"])
"""
from __future__ import annotations

from typing import Any, Optional


class UCPStoreException(Exception):
    """Base exception for all store errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "EMPTY_CART")
        details: Optional additional context
    """

    error_code: str = "STORE_ERROR"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Client Input Errors (4xx)
# =============================================================================

class CheckoutValidationError(UCPStoreException):
    """A checkout request failed validation against the catalog."""

    error_code = "VALIDATION_ERROR"
    http_status = 400


class EmptyCartError(CheckoutValidationError):
    """Checkout requested with no line items."""

    error_code = "EMPTY_CART"

    def __init__(self) -> None:
        super().__init__("line_items cannot be empty")


class ProductNotFoundError(CheckoutValidationError):
    """A line item references an id that is not in the catalog."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, item_id: str) -> None:
        super().__init__(
            f"Product {item_id} not found",
            details={"item_id": item_id},
        )
        self.item_id = item_id


class OutOfStockError(CheckoutValidationError):
    """A line item references a product that is currently unavailable."""

    error_code = "OUT_OF_STOCK"

    def __init__(self, item_id: str, title: Optional[str] = None) -> None:
        label = title or item_id
        super().__init__(
            f"{label} is currently out of stock",
            details={"item_id": item_id},
        )
        self.item_id = item_id


class InvalidQuantityError(CheckoutValidationError):
    """A line item quantity is not a positive integer."""

    error_code = "INVALID_QUANTITY"

    def __init__(self, item_id: str, quantity: Any) -> None:
        super().__init__(
            f"Quantity for {item_id} must be a positive integer, got {quantity!r}",
            details={"item_id": item_id, "quantity": repr(quantity)},
        )
        self.item_id = item_id


class MixedCurrencyError(CheckoutValidationError):
    """Line items are priced in more than one currency."""

    error_code = "MIXED_CURRENCY"

    def __init__(self, currencies: list[str]) -> None:
        super().__init__(
            f"All line items must share one currency, got {', '.join(currencies)}",
            details={"currencies": currencies},
        )


# =============================================================================
# State Conflict Errors
# =============================================================================

class SessionNotFoundError(UCPStoreException):
    """Requested checkout session does not exist."""

    error_code = "SESSION_NOT_FOUND"
    http_status = 404

    def __init__(self, session_id: str) -> None:
        super().__init__(
            f"Session {session_id} does not exist",
            details={"session_id": session_id},
        )
        self.session_id = session_id


class AlreadyCompleteError(UCPStoreException):
    """Completion requested on a session that has already been completed."""

    error_code = "ALREADY_COMPLETE"
    http_status = 400

    def __init__(self, session_id: str) -> None:
        super().__init__(
            "This session has already been completed",
            details={"session_id": session_id},
        )
        self.session_id = session_id


class InvalidSessionStateError(UCPStoreException):
    """An operation is not valid for the session's current status."""

    error_code = "INVALID_SESSION_STATE"
    http_status = 400

    def __init__(self, session_id: str, operation: str, status: str) -> None:
        super().__init__(
            f"Cannot {operation} session {session_id} with status {status}",
            details={"session_id": session_id, "operation": operation, "status": status},
        )


class UnsupportedUCPVersionError(UCPStoreException):
    """The caller speaks a UCP protocol version this store does not implement."""

    error_code = "UCP_VERSION_UNSUPPORTED"
    http_status = 400

    def __init__(self, version: str, supported: list[str]) -> None:
        super().__init__(
            f"UCP version {version} is not supported",
            details={"version": version, "supported": supported},
        )


# =============================================================================
# Internal Invariant Violations (5xx)
# =============================================================================

class InternalInvariantError(UCPStoreException):
    """An upstream component produced data that breaks a core invariant."""

    error_code = "INTERNAL_ERROR"
    http_status = 500


class SessionIdCollisionError(InternalInvariantError):
    """A freshly generated session id is already present in the store."""

    error_code = "SESSION_ID_COLLISION"

    def __init__(self, session_id: str) -> None:
        super().__init__(
            f"Generated session id {session_id} collides with an existing session",
            details={"session_id": session_id},
        )


class CurrencyMismatchError(InternalInvariantError):
    """Money computation received lines in more than one currency."""

    error_code = "CURRENCY_MISMATCH"

    def __init__(self, expected: str, found: str) -> None:
        super().__init__(
            f"Cannot total {found} with {expected}",
            details={"expected": expected, "found": found},
        )


class AmountOverflowError(InternalInvariantError):
    """A computed total exceeds the representable amount."""

    error_code = "AMOUNT_OVERFLOW"

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Total exceeds the maximum amount of {limit} minor units",
            details={"limit": str(limit)},
        )


class EmptyLineSetError(InternalInvariantError):
    """Money computation was asked to total an empty set of lines."""

    error_code = "EMPTY_LINE_SET"

    def __init__(self) -> None:
        super().__init__("Cannot compute a total over zero lines")


# =============================================================================
# Configuration Errors
# =============================================================================

class CatalogConfigurationError(UCPStoreException):
    """The catalog could not be loaded from its configured source."""

    error_code = "CATALOG_CONFIGURATION_ERROR"
    http_status = 500


__all__ = [
    "UCPStoreException",
    "CheckoutValidationError",
    "EmptyCartError",
    "ProductNotFoundError",
    "OutOfStockError",
    "InvalidQuantityError",
    "MixedCurrencyError",
    "SessionNotFoundError",
    "AlreadyCompleteError",
    "InvalidSessionStateError",
    "UnsupportedUCPVersionError",
    "InternalInvariantError",
    "SessionIdCollisionError",
    "CurrencyMismatchError",
    "AmountOverflowError",
    "EmptyLineSetError",
    "CatalogConfigurationError",
]
