"""
Authentication policy - Immutable configuration passed into the domain.

The domain never reads settings or environment variables itself;
the composition root builds an AuthPolicy once and hands it in.
"""

from dataclasses import dataclass

from .model import Scope

DEFAULT_STANDARD_TOKEN_TTL_SECONDS = 3600
DEFAULT_ELEVATED_TOKEN_TTL_SECONDS = 300
DEFAULT_TWO_FA_CODE_TTL_SECONDS = 600


@dataclass(frozen=True)
class AuthPolicy:
    """
    TTLs and behaviour switches for the use cases.

    revoke_tokens_on_password_change has no default on purpose: every
    deployment must decide whether a password change invalidates the
    account's other outstanding tokens.
    """

    revoke_tokens_on_password_change: bool
    standard_token_ttl_seconds: int = DEFAULT_STANDARD_TOKEN_TTL_SECONDS
    elevated_token_ttl_seconds: int = DEFAULT_ELEVATED_TOKEN_TTL_SECONDS
    two_fa_code_ttl_seconds: int = DEFAULT_TWO_FA_CODE_TTL_SECONDS

    def __post_init__(self) -> None:
        for name in (
            "standard_token_ttl_seconds",
            "elevated_token_ttl_seconds",
            "two_fa_code_ttl_seconds",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.elevated_token_ttl_seconds >= self.standard_token_ttl_seconds:
            raise ValueError("elevated tokens must expire sooner than standard tokens")

    def token_ttl_for(self, scope: Scope) -> int:
        if scope is Scope.ELEVATED:
            return self.elevated_token_ttl_seconds
        return self.standard_token_ttl_seconds
