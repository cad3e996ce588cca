"""UCP store data models."""

from .catalog import CatalogItem
from .checkout import (
    CheckoutSession,
    CheckoutSessionStatus,
    LineItemRecord,
    LineItemRequest,
    MoneyAmount,
    PaymentCapability,
    PaymentMethodType,
)
from .discovery import DiscoveryDescriptor, UCPCapability, UCPService

__all__ = [
    # Catalog
    "CatalogItem",
    # Checkout
    "CheckoutSession",
    "CheckoutSessionStatus",
    "LineItemRecord",
    "LineItemRequest",
    "MoneyAmount",
    "PaymentCapability",
    "PaymentMethodType",
    # Discovery
    "DiscoveryDescriptor",
    "UCPCapability",
    "UCPService",
]
