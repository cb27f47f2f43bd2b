"""
Shared fixtures for adversarial tests.

Attack simulations run against the in-memory adapters, whose locks give
the same atomicity guarantees as the Postgres and Redis adapters.
"""

import pytest

from src.adapters.memory import InMemoryBannedTokenStore, InMemoryTwoFaCodeStore, InMemoryUserStore
from src.adapters.security import BcryptPasswordHasher, JwtCredentialIssuer
from src.domain.auth_service import AuthService
from src.domain.policy import AuthPolicy
from tests.doubles import JWT_SECRET, RecordingEmailClient

# Production cost, so hashing dominates timing as it would in deployment
TIMING_BCRYPT_COST = 10


@pytest.fixture
def timing_service() -> AuthService:
    """AuthService with a realistic bcrypt cost for timing measurements."""
    return AuthService(
        user_store=InMemoryUserStore(),
        banned_tokens=InMemoryBannedTokenStore(),
        two_fa_store=InMemoryTwoFaCodeStore(),
        email_client=RecordingEmailClient(),
        issuer=JwtCredentialIssuer(JWT_SECRET),
        hasher=BcryptPasswordHasher(cost=TIMING_BCRYPT_COST),
        policy=AuthPolicy(revoke_tokens_on_password_change=False),
    )
