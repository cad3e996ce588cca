"""Tests for checkout session storage."""

import re
import threading

import pytest

from ucp_store.exceptions import SessionIdCollisionError, SessionNotFoundError
from ucp_store.models.checkout import (
    CheckoutSession,
    CheckoutSessionStatus,
    LineItemRecord,
    MoneyAmount,
)
from ucp_store.sessions import InMemoryCheckoutSessionStore, generate_session_id


def _session(session_id="sess_1"):
    return CheckoutSession(
        id=session_id,
        line_items=(LineItemRecord("latte", "Caramel Latte", 1),),
        total=MoneyAmount(550, "USD"),
    )


class TestGenerateSessionId:
    def test_format(self):
        assert re.fullmatch(r"sess_\d+_[0-9a-f]{20}", generate_session_id())

    def test_unique(self):
        assert len({generate_session_id() for _ in range(1000)}) == 1000


class TestInMemoryCheckoutSessionStore:
    """Tests for InMemoryCheckoutSessionStore."""

    def test_create_and_get(self):
        store = InMemoryCheckoutSessionStore()
        session = _session()

        assert store.create(session) is session
        assert store.get("sess_1") is session
        assert "sess_1" in store
        assert len(store) == 1

    def test_get_missing(self):
        store = InMemoryCheckoutSessionStore()

        assert store.get("sess_missing") is None
        assert "sess_missing" not in store

    def test_create_rejects_existing_id(self):
        store = InMemoryCheckoutSessionStore()
        original = store.create(_session())

        with pytest.raises(SessionIdCollisionError):
            store.create(_session())

        assert store.get("sess_1") is original

    def test_update_replaces_record(self):
        store = InMemoryCheckoutSessionStore()
        session = store.create(_session())

        completed = store.update(session.with_status(CheckoutSessionStatus.COMPLETE))

        assert store.get("sess_1") is completed
        assert store.get("sess_1").status == CheckoutSessionStatus.COMPLETE
        assert session.status == CheckoutSessionStatus.INCOMPLETE

    def test_update_missing(self):
        store = InMemoryCheckoutSessionStore()

        with pytest.raises(SessionNotFoundError):
            store.update(_session("sess_missing"))

    def test_lock_is_exclusive_per_session(self):
        store = InMemoryCheckoutSessionStore()
        store.create(_session("sess_1"))
        store.create(_session("sess_2"))
        entered = threading.Event()
        release = threading.Event()
        order = []

        def holder():
            with store.lock("sess_1"):
                entered.set()
                release.wait(timeout=5)
                order.append("holder")

        def waiter():
            entered.wait(timeout=5)
            with store.lock("sess_1"):
                order.append("waiter")

        threads = [threading.Thread(target=holder), threading.Thread(target=waiter)]
        for thread in threads:
            thread.start()
        entered.wait(timeout=5)

        # A different session id is not blocked
        with store.lock("sess_2"):
            order.append("other")

        release.set()
        for thread in threads:
            thread.join()

        assert order == ["other", "holder", "waiter"]

    def test_lock_unknown_session(self):
        store = InMemoryCheckoutSessionStore()

        with pytest.raises(SessionNotFoundError):
            with store.lock("sess_missing"):
                pass

    def test_unknown_ids_allocate_no_locks(self):
        store = InMemoryCheckoutSessionStore()
        store.create(_session())

        for i in range(100):
            with pytest.raises(SessionNotFoundError):
                with store.lock(f"sess_bogus_{i}"):
                    pass

        assert len(store) == 1
        assert list(store._session_locks) == ["sess_1"]
