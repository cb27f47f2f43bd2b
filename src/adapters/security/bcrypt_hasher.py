"""
bcrypt password hasher adapter - Implements PasswordHasher protocol.

Stored representation is bcrypt's modular crypt string
($2b$<cost>$<22-char salt><31-char digest>), which carries the
algorithm identifier, cost, salt and digest in one opaque value.

bcrypt only reads the first 72 bytes of its input, so passwords are
first reduced to a fixed 44-byte SHA-256 digest (base64). Every byte of
the password then contributes to the hash.
"""

import base64
import hashlib
import logging

import bcrypt

logger = logging.getLogger(__name__)

MIN_BCRYPT_COST = 4


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class BcryptPasswordHasher:
    """
    Implements PasswordHasher protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, cost: int = 10) -> None:
        """
        Args:
            cost: bcrypt work factor (log2 rounds)
        """
        if cost < MIN_BCRYPT_COST:
            raise ValueError(f"bcrypt cost must be at least {MIN_BCRYPT_COST}")
        self._cost = cost

    def hash(self, password: str) -> str:
        """Hash with a fresh random salt (bcrypt.gensalt)."""
        return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=self._cost)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Constant-time comparison via bcrypt.checkpw.

        A malformed stored hash never matches.
        """
        try:
            return bcrypt.checkpw(_prehash(password), password_hash.encode())
        except ValueError:
            logger.error("Stored password hash is not a valid bcrypt hash")
            return False
