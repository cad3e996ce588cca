"""UCP capabilities (checkout)."""

from .checkout import (
    DEFAULT_PAYMENT_CAPABILITIES,
    DEFAULT_SESSION_TTL_SECONDS,
    CheckoutEngine,
)

__all__ = [
    "CheckoutEngine",
    "DEFAULT_PAYMENT_CAPABILITIES",
    "DEFAULT_SESSION_TTL_SECONDS",
]
