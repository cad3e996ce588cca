"""Checkout session models.

A session is an immutable value. The only state change a session ever goes
through (incomplete -> complete) produces a new value via ``with_status``,
which the session store then swaps in for the old one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class CheckoutSessionStatus(str, Enum):
    """Status of a checkout session."""

    INCOMPLETE = "incomplete"  # Created, awaiting payment
    COMPLETE = "complete"  # Paid (terminal)
    EXPIRED = "expired"  # Timed out (terminal, not assigned by the engine)

    @property
    def is_terminal(self) -> bool:
        return self is not CheckoutSessionStatus.INCOMPLETE


class PaymentMethodType(str, Enum):
    """Payment method families a store can accept."""

    CARD = "card"
    BANK_ACCOUNT = "bank_account"
    WALLET = "wallet"


@dataclass(frozen=True, slots=True)
class MoneyAmount:
    """An exact amount in the smallest currency subunit.

    Serialized with the amount as a decimal string so no consumer ever
    parses it into a binary float.
    """

    amount: int
    currency: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("MoneyAmount.amount must be an int")
        if self.amount < 0:
            raise ValueError("MoneyAmount.amount must not be negative")

    def to_dict(self) -> Dict[str, str]:
        return {"amount": str(self.amount), "currency": self.currency}


@dataclass(frozen=True, slots=True)
class LineItemRequest:
    """A requested (item, quantity) pair, not yet validated."""

    item_id: str
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class LineItemRecord:
    """A validated line item stored on a session.

    The title is a snapshot of the catalog title at creation time.
    """

    item_id: str
    title: str
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item": {"id": self.item_id, "title": self.title},
            "quantity": self.quantity,
        }


@dataclass(frozen=True, slots=True)
class PaymentCapability:
    """A payment method the store accepts for a session."""

    type: PaymentMethodType = PaymentMethodType.CARD
    brands: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type.value}
        if self.brands:
            result["brands"] = list(self.brands)
        return result


@dataclass(frozen=True, slots=True)
class CheckoutSession:
    """A checkout session tracking an order from creation to payment."""

    id: str
    line_items: Tuple[LineItemRecord, ...]
    total: MoneyAmount
    status: CheckoutSessionStatus = CheckoutSessionStatus.INCOMPLETE
    payment_capabilities: Tuple[PaymentCapability, ...] = ()

    # Timing
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: Optional[datetime] = None

    # Caller-supplied metadata, copied from the create request
    metadata: Mapping[str, str] = field(default_factory=dict)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the expiry timestamp has passed.

        Informational only; no operation refuses an expired session.
        """
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now

    def with_status(self, status: CheckoutSessionStatus, now: Optional[datetime] = None) -> "CheckoutSession":
        """Return a copy of this session with a new status."""
        return replace(
            self,
            status=status,
            updated_at=now or datetime.now(timezone.utc),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "status": self.status.value,
            "line_items": [item.to_dict() for item in self.line_items],
            "total": self.total.to_dict(),
            "payment_capabilities": [cap.to_dict() for cap in self.payment_capabilities],
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "metadata": dict(self.metadata),
        }


__all__ = [
    "CheckoutSessionStatus",
    "PaymentMethodType",
    "MoneyAmount",
    "LineItemRequest",
    "LineItemRecord",
    "PaymentCapability",
    "CheckoutSession",
]
