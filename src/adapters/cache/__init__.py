"""Cache adapters - Redis-backed revocation list and 2FA code store."""

from .redis_stores import RedisBannedTokenStore, RedisTwoFaCodeStore

__all__ = ["RedisBannedTokenStore", "RedisTwoFaCodeStore"]
