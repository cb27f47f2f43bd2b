"""Logout use case - put the presented token on the revocation list."""

import logging
from dataclasses import dataclass, field

from ..authorization import TokenAuthorizer, remaining_ttl_seconds
from ..model import Clock, utc_now
from ..ports import BannedTokenStore

logger = logging.getLogger(__name__)


@dataclass
class LogoutUseCase:
    """
    Ban the token id for the rest of its natural lifetime.

    Idempotent: logging out an already-banned token succeeds silently.
    """

    authorizer: TokenAuthorizer
    banned_tokens: BannedTokenStore
    clock: Clock = field(default=utc_now)

    def execute(self, token: str) -> None:
        """
        Revoke token.

        Raises:
            AuthenticationError: Token invalid or expired
            InfrastructureError: Revocation list unreachable
        """
        claims = self.authorizer.verify_signature(token)
        self.banned_tokens.ban(claims.token_id, remaining_ttl_seconds(claims, self.clock()))
        logger.info("Token %s revoked for %s", claims.token_id, claims.identity)
