"""
In-memory store adapters - Implement the domain's storage protocols.

Process-local, lock-guarded dictionaries for development and tests.
Each store serializes its own operations with a threading.Lock, giving
the same atomicity guarantees the networked adapters provide:

- InMemoryUserStore.create is an atomic check-and-insert on email
- InMemoryTwoFaCodeStore.put replaces the user's previous challenge
- TTLs are measured with a monotonic clock and enforced on read
"""

import threading
import time
from collections.abc import Callable
from dataclasses import replace

from src.domain.model import Email, TwoFaAttemptId, TwoFaCode, User

MonotonicClock = Callable[[], float]


class InMemoryUserStore:
    """
    Implements UserStore protocol with a dict keyed by normalized email.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Returns copies so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._users: dict[Email, User] = {}
        self._lock = threading.Lock()

    def get(self, email: Email) -> User | None:
        with self._lock:
            user = self._users.get(email)
            return replace(user) if user is not None else None

    def create(self, user: User) -> bool:
        with self._lock:
            if user.email in self._users:
                return False
            self._users[user.email] = replace(user)
            return True

    def update(self, user: User) -> bool:
        with self._lock:
            if user.email not in self._users:
                return False
            self._users[user.email] = replace(user)
            return True

    def delete(self, email: Email) -> bool:
        with self._lock:
            return self._users.pop(email, None) is not None


class InMemoryBannedTokenStore:
    """Implements BannedTokenStore protocol with expiring dict entries."""

    def __init__(self, clock: MonotonicClock = time.monotonic) -> None:
        self._banned: dict[str, float] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def ban(self, token_id: str, ttl_seconds: int) -> None:
        with self._lock:
            expires = self._clock() + ttl_seconds
            # Re-banning never shortens an existing entry
            self._banned[token_id] = max(expires, self._banned.get(token_id, 0.0))

    def is_banned(self, token_id: str) -> bool:
        with self._lock:
            expires = self._banned.get(token_id)
            if expires is None:
                return False
            if self._clock() >= expires:
                del self._banned[token_id]
                return False
            return True


class InMemoryTwoFaCodeStore:
    """
    Implements TwoFaCodeStore protocol.

    Keeps a per-email pointer to the latest attempt so that issuing a new
    challenge for a user discards the previous one.
    """

    def __init__(self, clock: MonotonicClock = time.monotonic) -> None:
        self._codes: dict[TwoFaAttemptId, tuple[TwoFaCode, float]] = {}
        self._latest: dict[Email, TwoFaAttemptId] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def put(self, code: TwoFaCode, ttl_seconds: int) -> None:
        with self._lock:
            previous = self._latest.get(code.email)
            if previous is not None and previous != code.attempt_id:
                self._codes.pop(previous, None)
            self._codes[code.attempt_id] = (code, self._clock() + ttl_seconds)
            self._latest[code.email] = code.attempt_id

    def get(self, attempt_id: TwoFaAttemptId) -> TwoFaCode | None:
        with self._lock:
            entry = self._codes.get(attempt_id)
            if entry is None:
                return None
            code, expires = entry
            if self._clock() >= expires:
                self._discard(code)
                return None
            return code

    def delete(self, attempt_id: TwoFaAttemptId) -> bool:
        with self._lock:
            entry = self._codes.get(attempt_id)
            if entry is None:
                return False
            self._discard(entry[0])
            return True

    def _discard(self, code: TwoFaCode) -> None:
        self._codes.pop(code.attempt_id, None)
        if self._latest.get(code.email) == code.attempt_id:
            del self._latest[code.email]
