"""Change password use case - requires an elevated token."""

import logging
from dataclasses import dataclass, replace

from ..authorization import TokenAuthorizer
from ..exceptions import NotFoundError
from ..model import Password, Scope
from ..policy import AuthPolicy
from ..ports import PasswordHasher, UserStore

logger = logging.getLogger(__name__)

ACCOUNT_NOT_FOUND = "Account not found"


@dataclass
class ChangePasswordUseCase:
    """
    Replace the account's password hash.

    Other outstanding tokens are left alone unless
    policy.revoke_tokens_on_password_change is set, in which case the
    user's token_version is bumped and every earlier token stops
    authorizing.
    """

    authorizer: TokenAuthorizer
    user_store: UserStore
    hasher: PasswordHasher
    policy: AuthPolicy

    def execute(self, token: str, new_password: str) -> None:
        """
        Set a new password for the token holder.

        Raises:
            AuthenticationError: Token invalid, expired or revoked
            PermissionDeniedError: Token is not elevated
            ValidationError: New password fails policy
            NotFoundError: Account no longer exists
        """
        claims = self.authorizer.authorize(token, Scope.ELEVATED)
        password = Password(new_password)

        user = self.user_store.get(claims.identity)
        if user is None:
            raise NotFoundError(ACCOUNT_NOT_FOUND)

        token_version = user.token_version
        if self.policy.revoke_tokens_on_password_change:
            token_version += 1

        updated = replace(
            user,
            password_hash=self.hasher.hash(password.value),
            token_version=token_version,
        )
        if not self.user_store.update(updated):
            raise NotFoundError(ACCOUNT_NOT_FOUND)

        logger.info("Password changed for %s", claims.identity)
