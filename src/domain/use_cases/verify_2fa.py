"""Verify2Fa use case - exchange an emailed code for a token."""

import logging
import secrets
from dataclasses import dataclass, field

from ..exceptions import AuthenticationError, ExpiredError, NotFoundError
from ..model import (
    Clock,
    TwoFaAttemptId,
    TwoFaCode,
    credential_fingerprint,
    parse_two_fa_code,
    utc_now,
)
from ..policy import AuthPolicy
from ..ports import CredentialIssuer, TwoFaCodeStore, UserStore
from .login import Authenticated

logger = logging.getLogger(__name__)

ATTEMPT_NOT_FOUND = "2FA attempt not found"
ATTEMPT_EXPIRED = "2FA attempt expired"
INVALID_CODE = "Invalid 2FA code"


@dataclass
class Verify2FaUseCase:
    """
    Check a submitted code against the stored challenge.

    - Wrong code: AuthenticationError, challenge kept for retry until expiry
    - Right code: challenge deleted (single use), token minted with the
      scope the challenge was issued for
    - Account deleted, password changed or tokens revoked since the
      challenge was issued: challenge discarded, NotFoundError
    """

    two_fa_store: TwoFaCodeStore
    user_store: UserStore
    issuer: CredentialIssuer
    policy: AuthPolicy
    clock: Clock = field(default=utc_now)

    def execute(self, attempt_id: str, code: str) -> Authenticated:
        """
        Verify the code for attempt_id.

        Raises:
            ValidationError: Malformed attempt id or code
            NotFoundError: No such attempt (never issued, used, purged after
                TTL) or the account changed since it was issued
            ExpiredError: Store returned a challenge whose TTL has passed
            AuthenticationError: Code mismatch
        """
        attempt = TwoFaAttemptId(attempt_id)
        submitted = parse_two_fa_code(code)

        challenge = self.two_fa_store.get(attempt)
        if challenge is None:
            raise NotFoundError(ATTEMPT_NOT_FOUND)

        if challenge.is_expired(self.clock()):
            self.two_fa_store.delete(attempt)
            raise ExpiredError(ATTEMPT_EXPIRED)

        if not secrets.compare_digest(challenge.code.encode(), submitted.encode()):
            logger.warning("Wrong 2FA code for %s", challenge.email)
            raise AuthenticationError(INVALID_CODE)

        if not self._account_unchanged(challenge):
            logger.warning("Discarding stale 2FA attempt for %s", challenge.email)
            self.two_fa_store.delete(attempt)
            raise NotFoundError(ATTEMPT_NOT_FOUND)

        # Losing a race against a concurrent correct submission means the
        # code has already been spent.
        if not self.two_fa_store.delete(attempt):
            raise NotFoundError(ATTEMPT_NOT_FOUND)

        token = self.issuer.mint(
            challenge.email,
            challenge.scope,
            self.policy.token_ttl_for(challenge.scope),
            challenge.token_version,
        )
        logger.info("2FA verified for %s (scope=%s)", challenge.email, challenge.scope.value)
        return Authenticated(token=token, scope=challenge.scope)

    def _account_unchanged(self, challenge: TwoFaCode) -> bool:
        user = self.user_store.get(challenge.email)
        if user is None:
            return False
        return (
            user.token_version == challenge.token_version
            and secrets.compare_digest(
                credential_fingerprint(user.password_hash), challenge.credential_fingerprint
            )
        )
