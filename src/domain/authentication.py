"""
Credential checking and 2FA challenge issuing.

Shared by Login and Elevate, which run the same re-authentication.

Security Design - Account Enumeration Prevention:
------------------------------------------------
1. **Reference hash**: When the email is unknown, the password is still
   verified against a reference hash computed once with the configured
   cost. The hash comparison dominates response time, so unknown-email
   and wrong-password failures take comparable time.

2. **Identical errors**: Both failures raise AuthenticationError with the
   same message.

3. **Attempt ids**: A pending 2FA challenge is returned to the caller as
   an opaque TwoFaAttemptId, never as the email.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta

from .exceptions import AuthenticationError, InfrastructureError
from .model import (
    Clock,
    Email,
    Password,
    Scope,
    TwoFaAttemptId,
    TwoFaCode,
    ValidatedUser,
    credential_fingerprint,
    generate_two_fa_code,
    utc_now,
)
from .ports import EmailClient, PasswordHasher, TwoFaCodeStore, UserStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
TWO_FA_EMAIL_SUBJECT = "Your verification code"

# Hashed once per facade to keep unknown-email logins on the same cost path.
REFERENCE_PASSWORD = "reference-password-for-timing-safety"


def render_two_fa_email(code: TwoFaCode) -> str:
    """Plain-text body carrying the attempt id and code."""
    return (
        f"Your verification code is {code.code}.\n"
        f"Attempt ID: {code.attempt_id}\n"
        f"The code expires at {code.expires_at.isoformat()}."
    )


@dataclass
class CredentialVerifier:
    """Timing-safe email + password check against the user store."""

    user_store: UserStore
    hasher: PasswordHasher
    reference_hash: str

    def check(self, email: Email, password: Password) -> ValidatedUser:
        """
        Verify credentials.

        Raises:
            AuthenticationError: Unknown email or wrong password (indistinguishable)
            InfrastructureError: User store unreachable
        """
        user = self.user_store.get(email)
        if user is None:
            # Burn the same hash cost before failing
            self.hasher.verify(password.value, self.reference_hash)
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not self.hasher.verify(password.value, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return ValidatedUser(
            email=user.email,
            requires_2fa=user.requires_2fa,
            token_version=user.token_version,
            credential_fingerprint=credential_fingerprint(user.password_hash),
        )


@dataclass
class TwoFaChallenger:
    """
    Issues a 2FA challenge: store the code, then email it.

    Storage and delivery are one logical step. If delivery fails the
    stored code is deleted before the error propagates, so no orphaned
    code stays verifiable.
    """

    two_fa_store: TwoFaCodeStore
    email_client: EmailClient
    ttl_seconds: int
    clock: Clock = field(default=utc_now)

    def issue(self, user: ValidatedUser, scope: Scope) -> TwoFaAttemptId:
        attempt_id = TwoFaAttemptId.generate()
        code = TwoFaCode(
            attempt_id=attempt_id,
            code=generate_two_fa_code(),
            email=user.email,
            scope=scope,
            expires_at=self.clock() + timedelta(seconds=self.ttl_seconds),
            token_version=user.token_version,
            credential_fingerprint=user.credential_fingerprint,
        )

        # Overwrites any outstanding challenge for this user
        self.two_fa_store.put(code, self.ttl_seconds)

        try:
            self.email_client.send(user.email, TWO_FA_EMAIL_SUBJECT, render_two_fa_email(code))
        except InfrastructureError:
            logger.error("2FA code delivery failed, discarding attempt for %s", user.email)
            self.two_fa_store.delete(attempt_id)
            raise

        logger.info("2FA challenge issued for %s (scope=%s)", user.email, scope.value)
        return attempt_id
