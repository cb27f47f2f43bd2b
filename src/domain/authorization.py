"""
Token authorization - verify, check revocation, check scope.

Every use case that accepts a bearer token goes through TokenAuthorizer
so signature, expiry, revocation list and scope are checked in one
order everywhere.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from .exceptions import AuthenticationError, PermissionDeniedError
from .model import Scope, TokenClaims
from .policy import AuthPolicy
from .ports import BannedTokenStore, CredentialIssuer, UserStore

logger = logging.getLogger(__name__)

INVALID_TOKEN = "Invalid or expired token"
REVOKED_TOKEN = "Token has been revoked"
ELEVATION_REQUIRED = "Elevated token required"


def remaining_ttl_seconds(claims: TokenClaims, now: datetime) -> int:
    """
    Seconds until claims expire, rounded up, never below one.

    A revocation entry with this TTL outlives the token it bans.
    """
    remaining = (claims.expires_at - now).total_seconds()
    return max(1, math.ceil(remaining))


@dataclass
class TokenAuthorizer:
    """Resolve a raw bearer token into trusted claims."""

    issuer: CredentialIssuer
    banned_tokens: BannedTokenStore
    user_store: UserStore
    policy: AuthPolicy

    def verify_signature(self, token: str) -> TokenClaims:
        """Signature and expiry only; ignores the revocation list."""
        claims = self.issuer.verify(token) if token else None
        if claims is None:
            raise AuthenticationError(INVALID_TOKEN)
        return claims

    def authorize(self, token: str, required_scope: Scope | None = None) -> TokenClaims:
        """
        Full check for a token presented to a protected operation.

        Raises:
            AuthenticationError: Invalid, expired, revoked or superseded token
            PermissionDeniedError: Token valid but scope insufficient
        """
        claims = self.verify_signature(token)

        if self.banned_tokens.is_banned(claims.token_id):
            logger.warning("Rejected revoked token %s", claims.token_id)
            raise AuthenticationError(REVOKED_TOKEN)

        if required_scope is Scope.ELEVATED and claims.scope is not Scope.ELEVATED:
            raise PermissionDeniedError(ELEVATION_REQUIRED)

        if self.policy.revoke_tokens_on_password_change:
            user = self.user_store.get(claims.identity)
            if user is None or user.token_version != claims.token_version:
                logger.warning("Rejected superseded token %s", claims.token_id)
                raise AuthenticationError(REVOKED_TOKEN)

        return claims
