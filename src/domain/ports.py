"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols structurally,
without inheriting from them.

Every port method may raise InfrastructureError when the backing
service is unreachable; use cases propagate it and never retry.
"""

from typing import Protocol

from .model import Email, Scope, TokenClaims, TwoFaAttemptId, TwoFaCode, User


class UserStore(Protocol):
    """Port interface for account persistence."""

    def get(self, email: Email) -> User | None:
        """Return the user registered under email, or None."""
        ...

    def create(self, user: User) -> bool:
        """
        Atomically insert a new user.

        Uniqueness on email must be enforced by the store itself
        (unique constraint or equivalent) so that concurrent signups
        for the same address yield exactly one success.

        Returns:
            True if created, False if the email is already registered
        """
        ...

    def update(self, user: User) -> bool:
        """
        Replace the stored record for user.email.

        Returns:
            True if updated, False if no such user
        """
        ...

    def delete(self, email: Email) -> bool:
        """
        Remove the user registered under email.

        Returns:
            True if deleted, False if no such user
        """
        ...


class BannedTokenStore(Protocol):
    """Port interface for the token revocation list."""

    def ban(self, token_id: str, ttl_seconds: int) -> None:
        """
        Record token_id as revoked for ttl_seconds.

        Idempotent: banning an already-banned id is a no-op success.
        Must be durable before returning; callers rely on an immediate
        is_banned() observing the ban.
        """
        ...

    def is_banned(self, token_id: str) -> bool:
        """Return True if token_id is on the revocation list."""
        ...


class TwoFaCodeStore(Protocol):
    """Port interface for pending 2FA challenges."""

    def put(self, code: TwoFaCode, ttl_seconds: int) -> None:
        """
        Store code under its attempt id with a TTL.

        Any other outstanding challenge for the same email is invalidated
        (last write wins), bounding valid codes to one per user.
        """
        ...

    def get(self, attempt_id: TwoFaAttemptId) -> TwoFaCode | None:
        """Return the challenge, or None once deleted or past its TTL."""
        ...

    def delete(self, attempt_id: TwoFaAttemptId) -> bool:
        """
        Remove the challenge.

        Returns:
            True if this call removed it, False if it was already gone.
            Verify2Fa relies on this to make a code single-use even when
            two correct submissions race.
        """
        ...


class EmailClient(Protocol):
    """Port interface for email delivery."""

    def send(self, recipient: Email, subject: str, body: str) -> None:
        """
        Deliver a message.

        Raises:
            EmailDeliveryError: If delivery failed (never swallowed)
        """
        ...


class CredentialIssuer(Protocol):
    """Port interface for minting and verifying bearer tokens."""

    def mint(
        self, identity: Email, scope: Scope, ttl_seconds: int, token_version: int = 0
    ) -> str:
        """Sign a token with a fresh unique token id."""
        ...

    def verify(self, token: str) -> TokenClaims | None:
        """Return the claims, or None if the token is tampered, malformed or expired."""
        ...


class PasswordHasher(Protocol):
    """Port interface for salted password hashing."""

    def hash(self, password: str) -> str:
        """Hash with a fresh random salt; result embeds algorithm, salt and digest."""
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison of password against password_hash."""
        ...
