"""Universal Commerce Protocol (UCP) reference store.

A store exposes a discovery document, a product catalog and a checkout-session
lifecycle so an AI agent can find it, browse, build an order and pay:
- Discovery descriptor served at /.well-known/ucp
- Read-only product catalog
- Checkout sessions with exact integer totals and a one-way
  incomplete -> complete transition
"""

from .capabilities.checkout import CheckoutEngine
from .catalog import Catalog, default_catalog, load_catalog
from .discovery import (
    UCP_PROTOCOL_VERSION,
    UCP_SUPPORTED_VERSIONS,
    build_discovery,
    validate_ucp_version,
)
from .exceptions import (
    AlreadyCompleteError,
    EmptyCartError,
    InvalidQuantityError,
    MixedCurrencyError,
    OutOfStockError,
    ProductNotFoundError,
    SessionNotFoundError,
    UCPStoreException,
)
from .models import (
    CatalogItem,
    CheckoutSession,
    CheckoutSessionStatus,
    DiscoveryDescriptor,
    LineItemRecord,
    LineItemRequest,
    MoneyAmount,
    PaymentCapability,
)
from .money import compute_total
from .sessions import InMemoryCheckoutSessionStore, generate_session_id

__version__ = "0.1.0"

__all__ = [
    # Engine
    "CheckoutEngine",
    # Catalog
    "Catalog",
    "default_catalog",
    "load_catalog",
    # Money
    "compute_total",
    # Sessions
    "InMemoryCheckoutSessionStore",
    "generate_session_id",
    # Models
    "CatalogItem",
    "CheckoutSession",
    "CheckoutSessionStatus",
    "DiscoveryDescriptor",
    "LineItemRecord",
    "LineItemRequest",
    "MoneyAmount",
    "PaymentCapability",
    # Errors
    "UCPStoreException",
    "EmptyCartError",
    "ProductNotFoundError",
    "OutOfStockError",
    "InvalidQuantityError",
    "MixedCurrencyError",
    "SessionNotFoundError",
    "AlreadyCompleteError",
    # Version
    "UCP_PROTOCOL_VERSION",
    "UCP_SUPPORTED_VERSIONS",
    "build_discovery",
    "validate_ucp_version",
]
