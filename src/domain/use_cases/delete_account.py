"""Delete account use case - requires an elevated token."""

import logging
from dataclasses import dataclass, field

from ..authorization import TokenAuthorizer, remaining_ttl_seconds
from ..exceptions import NotFoundError
from ..model import Clock, Scope, utc_now
from ..ports import BannedTokenStore, UserStore
from .change_password import ACCOUNT_NOT_FOUND

logger = logging.getLogger(__name__)


@dataclass
class DeleteAccountUseCase:
    """
    Delete the user, then ban the presenting token.

    The ban only happens after the delete succeeded, so a failed delete
    never leaves a live account with a revoked token.
    """

    authorizer: TokenAuthorizer
    user_store: UserStore
    banned_tokens: BannedTokenStore
    clock: Clock = field(default=utc_now)

    def execute(self, token: str) -> None:
        """
        Delete the token holder's account.

        Raises:
            AuthenticationError: Token invalid, expired or revoked
            PermissionDeniedError: Token is not elevated
            NotFoundError: Account already gone
        """
        claims = self.authorizer.authorize(token, Scope.ELEVATED)

        if not self.user_store.delete(claims.identity):
            raise NotFoundError(ACCOUNT_NOT_FOUND)

        self.banned_tokens.ban(claims.token_id, remaining_ttl_seconds(claims, self.clock()))
        logger.info("Account deleted for %s", claims.identity)
