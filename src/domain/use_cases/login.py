"""
Login use case - password check, then a token or a 2FA challenge.

Outcomes:
    Authenticated(token, scope)  - user does not require 2FA
    TwoFaRequired(attempt_id)    - code emailed, finish with Verify2Fa
"""

import logging
from dataclasses import dataclass
from typing import ClassVar

from ..authentication import CredentialVerifier, TwoFaChallenger
from ..exceptions import AuthenticationError
from ..model import Email, Password, Scope, TwoFaAttemptId, ValidatedUser
from ..policy import AuthPolicy
from ..ports import CredentialIssuer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authenticated:
    """Successful authentication: a signed bearer token."""

    token: str
    scope: Scope


@dataclass(frozen=True)
class TwoFaRequired:
    """Credentials matched; a code was emailed for this attempt."""

    attempt_id: TwoFaAttemptId


LoginOutcome = Authenticated | TwoFaRequired


@dataclass
class LoginUseCase:
    """Authenticate with email and password for a standard session."""

    credentials: CredentialVerifier
    challenger: TwoFaChallenger
    issuer: CredentialIssuer
    policy: AuthPolicy

    scope: ClassVar[Scope] = Scope.STANDARD

    def execute(self, email: str, password: str) -> LoginOutcome:
        """
        Check credentials and either mint a token or start 2FA.

        Raises:
            ValidationError: Malformed email or password
            AuthenticationError: Unknown email or wrong password
            InfrastructureError: Store unreachable or code delivery failed
        """
        validated_email = Email(email)
        try:
            validated = self.credentials.check(validated_email, Password(password))
        except AuthenticationError:
            logger.warning("Rejected %s credentials for %s", self.scope.value, validated_email)
            raise

        if validated.requires_2fa:
            return TwoFaRequired(attempt_id=self.challenger.issue(validated, self.scope))

        return self._authenticated(validated)

    def _authenticated(self, user: ValidatedUser) -> Authenticated:
        token = self.issuer.mint(
            user.email,
            self.scope,
            self.policy.token_ttl_for(self.scope),
            user.token_version,
        )
        logger.info("%s scope token issued for %s", self.scope.value, user.email)
        return Authenticated(token=token, scope=self.scope)
