"""In-memory adapters - Process-local stores for development and tests."""

from .stores import InMemoryBannedTokenStore, InMemoryTwoFaCodeStore, InMemoryUserStore

__all__ = ["InMemoryBannedTokenStore", "InMemoryTwoFaCodeStore", "InMemoryUserStore"]
