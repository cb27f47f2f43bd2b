"""
Elevate use case - full re-authentication for a short-lived elevated token.

Runs exactly the same credential check as Login (same timing safety)
and never bypasses 2FA: a user who requires 2FA gets a TwoFaRequired
outcome whose stored challenge remembers the elevated scope, so the
token minted by Verify2Fa is elevated.
"""

from dataclasses import dataclass
from typing import ClassVar

from ..model import Scope
from .login import LoginUseCase


@dataclass
class ElevateUseCase(LoginUseCase):
    """Re-authenticate with email and password for an elevated token."""

    scope: ClassVar[Scope] = Scope.ELEVATED
