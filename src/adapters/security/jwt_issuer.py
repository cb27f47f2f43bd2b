"""
JWT credential issuer adapter - Implements CredentialIssuer protocol.

Tokens are HMAC-signed JWTs (HS256 by default) with claims:

    sub    identity (normalized email)
    scope  "standard" | "elevated"
    jti    unique token id (uuid4 hex), the key for the revocation list
    iat    issued at
    exp    expiry
    ver    the user's token_version at minting time

Validation is stateless; revocation is checked by the domain against
the BannedTokenStore.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidTokenError

from src.domain.exceptions import ValidationError
from src.domain.model import Clock, Email, Scope, TokenClaims, utc_now

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 32
_REQUIRED_CLAIMS = ["sub", "scope", "jti", "iat", "exp"]


class JwtCredentialIssuer:
    """
    Implements CredentialIssuer protocol via PyJWT.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", clock: Clock = utc_now) -> None:
        """
        Args:
            secret: HMAC signing key, at least 32 characters
            algorithm: JWS algorithm name
            clock: Time source for iat/exp when minting

        Raises:
            ValueError: If secret is too short
        """
        if len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"JWT secret must be at least {MIN_SECRET_LENGTH} characters")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def mint(
        self, identity: Email, scope: Scope, ttl_seconds: int, token_version: int = 0
    ) -> str:
        now = self._clock()
        payload = {
            "sub": identity.value,
            "scope": scope.value,
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=ttl_seconds)).timestamp()),
            "ver": token_version,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims | None:
        """
        Decode and check signature and expiry.

        Returns None for tampered, malformed, expired or foreign tokens
        rather than raising; the domain decides which error to surface.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except InvalidTokenError as exc:
            logger.debug("Token rejected: %s", exc)
            return None

        try:
            return TokenClaims(
                identity=Email(payload["sub"]),
                scope=Scope(payload["scope"]),
                token_id=str(payload["jti"]),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_version=int(payload.get("ver", 0)),
            )
        except (ValidationError, ValueError, TypeError) as exc:
            logger.warning("Token with malformed claims rejected: %s", exc)
            return None
