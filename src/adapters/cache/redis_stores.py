"""
Redis store adapters - Revocation list and pending 2FA challenges.

Both stores lean on Redis key expiry for their TTL semantics, so no
explicit cleanup is ever needed.

Key layout:
    banned_token:<jti>              -> "1"                 (EX = remaining token TTL)
    two_fa:attempt:<attempt_id>     -> JSON challenge      (EX = code TTL)
    two_fa:user:<email>             -> latest attempt id   (EX = code TTL)

Last-write-wins for 2FA: put() stores the new challenge, then swaps the
per-user pointer with SET ... GET and deletes whatever attempt the
pointer held before. Whichever put() swaps the pointer last keeps the
only valid challenge.
"""

import json
import logging
from datetime import datetime

from redis import Redis
from redis.exceptions import RedisError

from src.domain.exceptions import InfrastructureError, ValidationError
from src.domain.model import Email, Scope, TwoFaAttemptId, TwoFaCode

logger = logging.getLogger(__name__)

BANNED_TOKEN_KEY_PREFIX = "banned_token:"
TWO_FA_ATTEMPT_KEY_PREFIX = "two_fa:attempt:"
TWO_FA_USER_KEY_PREFIX = "two_fa:user:"


def _text(value: bytes | str) -> str:
    return value.decode() if isinstance(value, bytes) else value


class RedisBannedTokenStore:
    """
    Implements BannedTokenStore protocol via Redis SET EX.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, client: Redis) -> None:
        self._client = client

    def ban(self, token_id: str, ttl_seconds: int) -> None:
        try:
            self._client.set(f"{BANNED_TOKEN_KEY_PREFIX}{token_id}", "1", ex=ttl_seconds)
        except RedisError as exc:
            logger.error("Failed to ban token %s: %s", token_id, exc)
            raise InfrastructureError("Revocation list unavailable") from exc

    def is_banned(self, token_id: str) -> bool:
        try:
            return bool(self._client.exists(f"{BANNED_TOKEN_KEY_PREFIX}{token_id}"))
        except RedisError as exc:
            logger.error("Failed to check token %s: %s", token_id, exc)
            raise InfrastructureError("Revocation list unavailable") from exc


class RedisTwoFaCodeStore:
    """Implements TwoFaCodeStore protocol with JSON records in Redis."""

    def __init__(self, client: Redis) -> None:
        self._client = client

    def put(self, code: TwoFaCode, ttl_seconds: int) -> None:
        attempt_key = f"{TWO_FA_ATTEMPT_KEY_PREFIX}{code.attempt_id}"
        user_key = f"{TWO_FA_USER_KEY_PREFIX}{code.email}"
        try:
            self._client.set(attempt_key, _serialize(code), ex=ttl_seconds)
            previous = self._client.set(user_key, code.attempt_id.value, ex=ttl_seconds, get=True)
            if previous is not None and _text(previous) != code.attempt_id.value:
                self._client.delete(f"{TWO_FA_ATTEMPT_KEY_PREFIX}{_text(previous)}")
        except RedisError as exc:
            logger.error("Failed to store 2FA code for %s: %s", code.email, exc)
            raise InfrastructureError("2FA code store unavailable") from exc

    def get(self, attempt_id: TwoFaAttemptId) -> TwoFaCode | None:
        try:
            raw = self._client.get(f"{TWO_FA_ATTEMPT_KEY_PREFIX}{attempt_id}")
        except RedisError as exc:
            logger.error("Failed to read 2FA attempt: %s", exc)
            raise InfrastructureError("2FA code store unavailable") from exc
        if raw is None:
            return None
        return _deserialize(_text(raw))

    def delete(self, attempt_id: TwoFaAttemptId) -> bool:
        try:
            return self._client.delete(f"{TWO_FA_ATTEMPT_KEY_PREFIX}{attempt_id}") > 0
        except RedisError as exc:
            logger.error("Failed to delete 2FA attempt: %s", exc)
            raise InfrastructureError("2FA code store unavailable") from exc


def _serialize(code: TwoFaCode) -> str:
    return json.dumps(
        {
            "attempt_id": code.attempt_id.value,
            "code": code.code,
            "email": code.email.value,
            "scope": code.scope.value,
            "expires_at": code.expires_at.isoformat(),
            "token_version": code.token_version,
            "credential_fingerprint": code.credential_fingerprint,
        }
    )


def _deserialize(raw: str) -> TwoFaCode:
    try:
        data = json.loads(raw)
        return TwoFaCode(
            attempt_id=TwoFaAttemptId(data["attempt_id"]),
            code=data["code"],
            email=Email(data["email"]),
            scope=Scope(data["scope"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            token_version=data.get("token_version", 0),
            credential_fingerprint=data.get("credential_fingerprint", ""),
        )
    except (ValueError, KeyError, TypeError, ValidationError) as exc:
        logger.error("Corrupt 2FA record in Redis: %s", exc)
        raise InfrastructureError("2FA code store returned a corrupt record") from exc
