"""Checkout session storage.

The store is the single source of truth for which sessions exist and what
status they are in. Sessions are immutable values, so handing the stored
object to a caller never exposes a mutable copy.
"""

from __future__ import annotations

import secrets
import threading
import time
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, Optional, Protocol

from .exceptions import SessionIdCollisionError, SessionNotFoundError
from .models.checkout import CheckoutSession

SESSION_ID_PREFIX = "sess_"

# 10 random bytes = 80 bits alongside the millisecond timestamp
SESSION_ID_RANDOM_BYTES = 10


def generate_session_id() -> str:
    """Generate an opaque session id.

    Format: ``sess_<unix millis>_<20 hex chars>``. Callers must not parse it.
    """
    return f"{SESSION_ID_PREFIX}{time.time_ns() // 1_000_000}_{secrets.token_hex(SESSION_ID_RANDOM_BYTES)}"


class CheckoutSessionStore(Protocol):
    """Protocol for checkout session storage."""

    def create(self, session: CheckoutSession) -> CheckoutSession:
        """Insert a new session. Fails if the id is already taken."""
        ...

    def get(self, session_id: str) -> Optional[CheckoutSession]:
        """Retrieve a checkout session by ID."""
        ...

    def update(self, session: CheckoutSession) -> CheckoutSession:
        """Replace the stored record for an existing session id."""
        ...

    def lock(self, session_id: str) -> ContextManager[None]:
        """Hold exclusive access to one stored session for a read-modify-write."""
        ...


class InMemoryCheckoutSessionStore:
    """Thread-safe in-memory implementation of CheckoutSessionStore.

    Sessions live for the lifetime of the process; nothing is evicted.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, CheckoutSession] = {}
        self._session_locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._guard:
            return session_id in self._sessions

    def create(self, session: CheckoutSession) -> CheckoutSession:
        """Insert a new session.

        Raises:
            SessionIdCollisionError: If the id is already present
        """
        with self._guard:
            if session.id in self._sessions:
                raise SessionIdCollisionError(session.id)
            self._sessions[session.id] = session
            self._session_locks[session.id] = threading.Lock()
        return session

    def get(self, session_id: str) -> Optional[CheckoutSession]:
        """Retrieve a checkout session by ID."""
        with self._guard:
            return self._sessions.get(session_id)

    def update(self, session: CheckoutSession) -> CheckoutSession:
        """Replace an existing session.

        Raises:
            SessionNotFoundError: If no session with that id exists
        """
        with self._guard:
            if session.id not in self._sessions:
                raise SessionNotFoundError(session.id)
            self._sessions[session.id] = session
        return session

    @contextmanager
    def lock(self, session_id: str) -> Iterator[None]:
        """Serialize read-modify-write sequences on one session id.

        Locks exist only for stored sessions.

        Raises:
            SessionNotFoundError: If no session with that id exists
        """
        with self._guard:
            session_lock = self._session_locks.get(session_id)
        if session_lock is None:
            raise SessionNotFoundError(session_id)
        with session_lock:
            yield


__all__ = [
    "SESSION_ID_PREFIX",
    "generate_session_id",
    "CheckoutSessionStore",
    "InMemoryCheckoutSessionStore",
]
