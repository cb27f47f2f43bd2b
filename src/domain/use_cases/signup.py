"""Signup use case - register a new account."""

import logging
from dataclasses import dataclass

from ..exceptions import ConflictError
from ..model import Email, Password, User
from ..ports import PasswordHasher, UserStore

logger = logging.getLogger(__name__)


@dataclass
class SignupUseCase:
    """
    Validate input, hash the password with a fresh salt, create the user.

    There is no pre-check for an existing email: the store's atomic
    uniqueness guarantee is the only guard, so two concurrent signups
    for the same address yield exactly one success.
    """

    user_store: UserStore
    hasher: PasswordHasher

    def execute(self, email: str, password: str, requires_2fa: bool = False) -> Email:
        """
        Register a new user.

        Args:
            email: Raw email address (normalized on validation)
            password: Raw password (validated, then hashed)
            requires_2fa: Whether login must go through an emailed code

        Returns:
            The normalized email identity. Never the password or hash.

        Raises:
            ValidationError: Malformed email or password
            ConflictError: Email already registered
        """
        validated_email = Email(email)
        validated_password = Password(password)

        user = User(
            email=validated_email,
            password_hash=self.hasher.hash(validated_password.value),
            requires_2fa=requires_2fa,
        )

        if not self.user_store.create(user):
            raise ConflictError(str(validated_email))

        logger.info("Account created for %s (2fa=%s)", validated_email, requires_2fa)
        return validated_email
