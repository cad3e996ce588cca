"""UCP Checkout Capability.

Provides checkout session management for UCP commerce flows:
- create_checkout: Validate a cart against the catalog and open a session
- get_checkout: Look up a session
- complete_checkout: Mark an open session as paid, exactly once
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Mapping, Sequence, Tuple

from ..catalog import Catalog
from ..discovery import build_discovery
from ..exceptions import (
    AlreadyCompleteError,
    EmptyCartError,
    InvalidQuantityError,
    InvalidSessionStateError,
    MixedCurrencyError,
    OutOfStockError,
    ProductNotFoundError,
    SessionNotFoundError,
)
from ..models.catalog import CatalogItem
from ..models.checkout import (
    CheckoutSession,
    CheckoutSessionStatus,
    LineItemRecord,
    LineItemRequest,
    PaymentCapability,
    PaymentMethodType,
)
from ..models.discovery import DiscoveryDescriptor
from ..money import MAX_AMOUNT_MINOR, compute_total
from ..sessions import CheckoutSessionStore, InMemoryCheckoutSessionStore, generate_session_id

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 30 * 60

DEFAULT_PAYMENT_CAPABILITIES = (
    PaymentCapability(type=PaymentMethodType.CARD, brands=("visa", "mastercard", "amex")),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CheckoutEngine:
    """
    UCP Checkout engine for managing checkout sessions.

    Provides methods to:
    - Create checkout sessions from validated cart items
    - Retrieve sessions
    - Complete sessions (incomplete -> complete)

    The engine holds no session state itself; everything lives in the
    injected store so tests can run against isolated stores.
    """

    def __init__(
        self,
        catalog: Catalog,
        store: CheckoutSessionStore | None = None,
        payment_capabilities: Iterable[PaymentCapability] = DEFAULT_PAYMENT_CAPABILITIES,
        session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        max_amount_minor: int = MAX_AMOUNT_MINOR,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = generate_session_id,
    ) -> None:
        """
        Initialize the checkout engine.

        Args:
            catalog: Catalog to validate line items against
            store: Session storage implementation
            payment_capabilities: Payment methods declared on every session
            session_ttl_seconds: Advisory session lifetime
            max_amount_minor: Largest session total accepted
            clock: Source of the current UTC time
            id_factory: Session id generator
        """
        if session_ttl_seconds <= 0:
            raise ValueError("session_ttl_seconds must be positive")
        self._catalog = catalog
        self._store = store if store is not None else InMemoryCheckoutSessionStore()
        self._payment_capabilities = tuple(payment_capabilities)
        self._session_ttl = timedelta(seconds=session_ttl_seconds)
        self._max_amount_minor = max_amount_minor
        self._clock = clock
        self._id_factory = id_factory

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def store(self) -> CheckoutSessionStore:
        return self._store

    def describe(self, endpoint: str) -> DiscoveryDescriptor:
        """Build the discovery descriptor for this store.

        Args:
            endpoint: Public base URL agents should send shopping requests to
        """
        return build_discovery(endpoint)

    def list_available(self) -> Tuple[CatalogItem, ...]:
        """Products agents can currently buy."""
        return self._catalog.list_available()

    def create_checkout(
        self,
        line_items: Sequence[LineItemRequest],
        metadata: Mapping[str, str] | None = None,
    ) -> CheckoutSession:
        """
        Create a new checkout session.

        Lines are validated in request order and the first failure is
        raised. Nothing is stored unless every line is valid.

        Args:
            line_items: Requested items and quantities
            metadata: Caller metadata copied onto the session

        Returns:
            The created CheckoutSession with status incomplete

        Raises:
            EmptyCartError: If no line items are given
            ProductNotFoundError: If an item id is not in the catalog
            OutOfStockError: If an item is not currently available
            InvalidQuantityError: If a quantity is not a positive integer
            MixedCurrencyError: If items are priced in different currencies
        """
        if not line_items:
            raise EmptyCartError()

        resolved: List[Tuple[CatalogItem, int]] = []
        for request in line_items:
            product = self._catalog.lookup(request.item_id)
            if product is None:
                raise ProductNotFoundError(request.item_id)
            if not product.in_stock:
                raise OutOfStockError(product.id, product.title)
            quantity = request.quantity
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise InvalidQuantityError(product.id, quantity)
            resolved.append((product, quantity))

        currencies = sorted({product.currency for product, _ in resolved})
        if len(currencies) > 1:
            raise MixedCurrencyError(currencies)

        total = compute_total(resolved, max_amount_minor=self._max_amount_minor)

        now = self._clock()
        session = CheckoutSession(
            id=self._id_factory(),
            line_items=tuple(
                LineItemRecord(item_id=product.id, title=product.title, quantity=quantity)
                for product, quantity in resolved
            ),
            total=total,
            status=CheckoutSessionStatus.INCOMPLETE,
            payment_capabilities=self._payment_capabilities,
            created_at=now,
            updated_at=now,
            expires_at=now + self._session_ttl,
            metadata=dict(metadata or {}),
        )

        self._store.create(session)

        logger.info(
            f"Created checkout session: session_id={session.id}, "
            f"items={len(session.line_items)}, total={total.amount} {total.currency}"
        )

        return session

    def get_checkout(self, session_id: str) -> CheckoutSession:
        """
        Get a checkout session.

        Expiry is not enforced here; an incomplete session past its
        ``expires_at`` is returned as-is.

        Raises:
            SessionNotFoundError: If session not found
        """
        session = self._store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def complete_checkout(self, session_id: str) -> CheckoutSession:
        """
        Complete a checkout session.

        Transitions: INCOMPLETE -> COMPLETE. Completion models payment
        capture, so a repeated call is rejected rather than accepted twice.

        Raises:
            SessionNotFoundError: If session not found
            AlreadyCompleteError: If the session was already completed
            InvalidSessionStateError: If the session is in any other terminal state
        """
        with self._store.lock(session_id):
            session = self._store.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)

            if session.status == CheckoutSessionStatus.COMPLETE:
                raise AlreadyCompleteError(session_id)
            if session.status != CheckoutSessionStatus.INCOMPLETE:
                raise InvalidSessionStateError(session_id, "complete", session.status.value)

            completed = self._store.update(
                session.with_status(CheckoutSessionStatus.COMPLETE, now=self._clock())
            )

        logger.info(
            f"Checkout completed: session_id={session_id}, "
            f"total={completed.total.amount} {completed.total.currency}"
        )

        return completed


__all__ = [
    "DEFAULT_SESSION_TTL_SECONDS",
    "DEFAULT_PAYMENT_CAPABILITIES",
    "CheckoutEngine",
]
