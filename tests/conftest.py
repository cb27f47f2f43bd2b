"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock (wall time and monotonic)
- In-memory port adapters and a recording email client
- A fully wired AuthService with a fast bcrypt cost
"""

from collections.abc import Callable

import pytest

from src.adapters.memory import InMemoryBannedTokenStore, InMemoryTwoFaCodeStore, InMemoryUserStore
from src.adapters.security import BcryptPasswordHasher, JwtCredentialIssuer
from src.domain.auth_service import AuthService
from src.domain.policy import AuthPolicy
from tests.doubles import FAST_BCRYPT_COST, JWT_SECRET, FakeClock, RecordingEmailClient


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(cost=FAST_BCRYPT_COST)


@pytest.fixture
def issuer() -> JwtCredentialIssuer:
    return JwtCredentialIssuer(JWT_SECRET)


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def banned_tokens(clock: FakeClock) -> InMemoryBannedTokenStore:
    return InMemoryBannedTokenStore(clock=clock.monotonic)


@pytest.fixture
def two_fa_store(clock: FakeClock) -> InMemoryTwoFaCodeStore:
    return InMemoryTwoFaCodeStore(clock=clock.monotonic)


@pytest.fixture
def email_client() -> RecordingEmailClient:
    return RecordingEmailClient()


@pytest.fixture
def make_service(
    user_store: InMemoryUserStore,
    banned_tokens: InMemoryBannedTokenStore,
    two_fa_store: InMemoryTwoFaCodeStore,
    email_client: RecordingEmailClient,
    issuer: JwtCredentialIssuer,
    hasher: BcryptPasswordHasher,
    clock: FakeClock,
) -> Callable[..., AuthService]:
    """Factory so tests can pick the revocation policy."""

    def _make(revoke_tokens_on_password_change: bool = False) -> AuthService:
        return AuthService(
            user_store=user_store,
            banned_tokens=banned_tokens,
            two_fa_store=two_fa_store,
            email_client=email_client,
            issuer=issuer,
            hasher=hasher,
            policy=AuthPolicy(revoke_tokens_on_password_change=revoke_tokens_on_password_change),
            clock=clock,
        )

    return _make


@pytest.fixture
def service(make_service: Callable[..., AuthService]) -> AuthService:
    return make_service()
