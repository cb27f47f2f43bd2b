"""Verify token use cases - for front ends guarding their own routes."""

from dataclasses import dataclass

from ..authorization import TokenAuthorizer
from ..model import Scope, TokenClaims


@dataclass
class VerifyTokenUseCase:
    """Accept any valid, unrevoked token."""

    authorizer: TokenAuthorizer

    def execute(self, token: str) -> TokenClaims:
        return self.authorizer.authorize(token)


@dataclass
class VerifyElevatedTokenUseCase:
    """Accept only valid, unrevoked elevated tokens."""

    authorizer: TokenAuthorizer

    def execute(self, token: str) -> TokenClaims:
        return self.authorizer.authorize(token, Scope.ELEVATED)
