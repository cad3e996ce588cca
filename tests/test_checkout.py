"""Tests for the checkout engine."""

import threading
import time
from datetime import datetime, timezone

import pytest

from ucp_store.capabilities.checkout import CheckoutEngine
from ucp_store.exceptions import (
    AlreadyCompleteError,
    AmountOverflowError,
    EmptyCartError,
    InvalidQuantityError,
    InvalidSessionStateError,
    MixedCurrencyError,
    OutOfStockError,
    ProductNotFoundError,
    SessionIdCollisionError,
    SessionNotFoundError,
)
from ucp_store.catalog import Catalog
from ucp_store.models.catalog import CatalogItem
from ucp_store.models.checkout import (
    CheckoutSessionStatus,
    LineItemRecord,
    LineItemRequest,
    MoneyAmount,
    PaymentCapability,
    PaymentMethodType,
)
from ucp_store.sessions import InMemoryCheckoutSessionStore

START = datetime(2026, 1, 11, 12, 0, tzinfo=timezone.utc)


class TestCreateCheckout:
    """Tests for CheckoutEngine.create_checkout."""

    def test_latte_scenario(self, engine):
        """Two lattes at 550 cents total 1100 USD."""
        session = engine.create_checkout([LineItemRequest("latte", 2)])

        assert session.status == CheckoutSessionStatus.INCOMPLETE
        assert session.total == MoneyAmount(1100, "USD")
        assert session.total.to_dict() == {"amount": "1100", "currency": "USD"}
        assert session.line_items == (LineItemRecord("latte", "Caramel Latte", 2),)

    def test_total_sums_all_lines(self, engine):
        session = engine.create_checkout([
            LineItemRequest("latte", 2),
            LineItemRequest("mocha", 1),
            LineItemRequest("croissant", 3),
        ])

        assert session.total.amount == 550 * 2 + 600 + 350 * 3
        assert [line.item_id for line in session.line_items] == ["latte", "mocha", "croissant"]

    def test_total_is_exact_beyond_float_precision(self, store):
        """Totals above 2**53 keep every digit."""
        price = 2**53 + 1
        engine = CheckoutEngine(
            catalog=Catalog([CatalogItem(id="bulk", title="Bulk", price=price)]),
            store=store,
        )

        session = engine.create_checkout([LineItemRequest("bulk", 3)])

        assert session.total.amount == 3 * price
        assert session.total.to_dict()["amount"] == "27021597764222979"
        assert float(session.total.amount) != session.total.amount

    def test_session_metadata(self, engine, clock):
        session = engine.create_checkout(
            [LineItemRequest("latte", 1)],
            metadata={"agent": "test-agent"},
        )

        assert session.metadata == {"agent": "test-agent"}
        assert session.created_at == START
        assert session.expires_at == START.replace(minute=30)
        assert session.payment_capabilities == (
            PaymentCapability(PaymentMethodType.CARD, ("visa", "mastercard", "amex")),
        )

    def test_session_is_stored(self, engine, store):
        session = engine.create_checkout([LineItemRequest("latte", 1)])

        assert store.get(session.id) == session
        assert len(store) == 1

    def test_session_ids_are_unique(self, engine):
        ids = {engine.create_checkout([LineItemRequest("latte", 1)]).id for _ in range(50)}

        assert len(ids) == 50

    def test_title_is_snapshot(self, store):
        """Later catalog changes do not rewrite existing sessions."""
        engine = CheckoutEngine(
            catalog=Catalog([CatalogItem(id="latte", title="Caramel Latte", price=550)]),
            store=store,
        )
        session = engine.create_checkout([LineItemRequest("latte", 1)])

        engine._catalog = Catalog([CatalogItem(id="latte", title="Vanilla Latte", price=650)])

        assert engine.get_checkout(session.id).line_items[0].title == "Caramel Latte"
        assert engine.get_checkout(session.id).total.amount == 550

    def test_empty_cart(self, engine, store):
        with pytest.raises(EmptyCartError):
            engine.create_checkout([])

        assert len(store) == 0

    def test_unknown_product(self, engine, store):
        with pytest.raises(ProductNotFoundError) as exc_info:
            engine.create_checkout([LineItemRequest("ghost", 1)])

        assert exc_info.value.item_id == "ghost"
        assert exc_info.value.details == {"item_id": "ghost"}
        assert len(store) == 0

    def test_unknown_product_among_valid_lines_stores_nothing(self, engine, store):
        with pytest.raises(ProductNotFoundError):
            engine.create_checkout([
                LineItemRequest("latte", 2),
                LineItemRequest("mocha", 1),
                LineItemRequest("ghost", 1),
            ])

        assert len(store) == 0

    def test_out_of_stock(self, engine, store):
        with pytest.raises(OutOfStockError) as exc_info:
            engine.create_checkout([LineItemRequest("latte", 1), LineItemRequest("sandwich", 1)])

        assert exc_info.value.item_id == "sandwich"
        assert "Turkey Sandwich" in exc_info.value.message
        assert len(store) == 0

    def test_first_failure_wins(self, engine):
        """Lines are checked in order; the earliest bad line is reported."""
        with pytest.raises(OutOfStockError):
            engine.create_checkout([LineItemRequest("sandwich", 1), LineItemRequest("ghost", 1)])

        with pytest.raises(ProductNotFoundError):
            engine.create_checkout([LineItemRequest("ghost", 1), LineItemRequest("sandwich", 1)])

    @pytest.mark.parametrize("quantity", [0, -1, True, 1.5, "2"])
    def test_invalid_quantity(self, engine, store, quantity):
        with pytest.raises(InvalidQuantityError):
            engine.create_checkout([LineItemRequest("latte", quantity)])

        assert len(store) == 0

    def test_mixed_currency(self, engine, store):
        with pytest.raises(MixedCurrencyError) as exc_info:
            engine.create_checkout([LineItemRequest("latte", 1), LineItemRequest("stroopwafel", 1)])

        assert exc_info.value.details == {"currencies": ["EUR", "USD"]}
        assert len(store) == 0

    def test_overflow_fails_closed(self, store):
        engine = CheckoutEngine(
            catalog=Catalog([CatalogItem(id="yacht", title="Yacht", price=2**62)]),
            store=store,
        )

        with pytest.raises(AmountOverflowError):
            engine.create_checkout([LineItemRequest("yacht", 2)])

        assert len(store) == 0

    def test_id_collision_is_internal_error(self, catalog, store):
        engine = CheckoutEngine(catalog=catalog, store=store, id_factory=lambda: "sess_fixed")
        engine.create_checkout([LineItemRequest("latte", 1)])

        with pytest.raises(SessionIdCollisionError):
            engine.create_checkout([LineItemRequest("mocha", 1)])

        assert engine.get_checkout("sess_fixed").line_items[0].item_id == "latte"

    def test_rejects_non_positive_ttl(self, catalog):
        with pytest.raises(ValueError):
            CheckoutEngine(catalog=catalog, session_ttl_seconds=0)


class TestGetCheckout:
    """Tests for CheckoutEngine.get_checkout."""

    def test_returns_created_session(self, engine):
        created = engine.create_checkout([LineItemRequest("latte", 2)])

        assert engine.get_checkout(created.id) == created
        assert engine.get_checkout(created.id).to_dict() == created.to_dict()

    def test_unknown_session(self, engine):
        with pytest.raises(SessionNotFoundError) as exc_info:
            engine.get_checkout("sess_nonexistent")

        assert "sess_nonexistent" in str(exc_info.value)


class TestCompleteCheckout:
    """Tests for CheckoutEngine.complete_checkout."""

    def test_complete(self, engine, clock):
        session = engine.create_checkout([LineItemRequest("latte", 2)])
        clock.advance(minutes=5)

        completed = engine.complete_checkout(session.id)

        assert completed.status == CheckoutSessionStatus.COMPLETE
        assert completed.updated_at == START.replace(minute=5)
        assert engine.get_checkout(session.id).status == CheckoutSessionStatus.COMPLETE

    def test_second_completion_rejected(self, engine):
        session = engine.create_checkout([LineItemRequest("latte", 2)])
        first = engine.complete_checkout(session.id)

        with pytest.raises(AlreadyCompleteError):
            engine.complete_checkout(session.id)

        stored = engine.get_checkout(session.id)
        assert stored == first
        assert stored.total == session.total
        assert stored.line_items == session.line_items

    def test_unknown_session(self, engine):
        with pytest.raises(SessionNotFoundError):
            engine.complete_checkout("sess_nonexistent")

    def test_unknown_sessions_leave_no_trace(self, engine, store):
        """Completing made-up ids does not grow the store."""
        for i in range(1000):
            with pytest.raises(SessionNotFoundError):
                engine.complete_checkout(f"sess_bogus_{i}")

        assert len(store) == 0
        assert store._session_locks == {}

    def test_expired_session_still_completes(self, engine, clock):
        """Expiry is advisory metadata; nothing enforces it yet."""
        session = engine.create_checkout([LineItemRequest("latte", 1)])
        clock.advance(minutes=31)

        assert session.is_expired(clock())
        assert engine.get_checkout(session.id).status == CheckoutSessionStatus.INCOMPLETE

        completed = engine.complete_checkout(session.id)

        assert completed.status == CheckoutSessionStatus.COMPLETE

    def test_expired_status_cannot_complete(self, engine, store):
        session = engine.create_checkout([LineItemRequest("latte", 1)])
        store.update(session.with_status(CheckoutSessionStatus.EXPIRED))

        with pytest.raises(InvalidSessionStateError):
            engine.complete_checkout(session.id)

    def test_concurrent_completion_succeeds_once(self, catalog):
        """Parallel completions of one session produce exactly one success."""

        class SlowStore(InMemoryCheckoutSessionStore):
            def get(self, session_id):
                session = super().get(session_id)
                time.sleep(0.01)
                return session

        engine = CheckoutEngine(catalog=catalog, store=SlowStore())
        session = engine.create_checkout([LineItemRequest("latte", 1)])

        workers = 8
        barrier = threading.Barrier(workers)
        successes = []
        rejections = []

        def complete():
            barrier.wait()
            try:
                successes.append(engine.complete_checkout(session.id))
            except AlreadyCompleteError as e:
                rejections.append(e)

        threads = [threading.Thread(target=complete) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(successes) == 1
        assert len(rejections) == workers - 1


class TestEnginePassthroughs:
    def test_list_available(self, engine):
        assert [item.id for item in engine.list_available()] == ["latte", "mocha", "croissant", "stroopwafel"]

    def test_describe(self, catalog):
        engine = CheckoutEngine(catalog=catalog)

        document = engine.describe("https://shop.example/").to_dict()

        assert document["ucp"]["services"]["dev.ucp.shopping"]["rest"]["endpoint"] == "https://shop.example"
