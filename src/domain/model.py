"""
Domain model - Value objects and entities for authentication.

Value objects validate at construction and are immutable. Entities are
plain dataclasses owned by the backing stores; the domain only holds
transient instances for the duration of a single use case call.

Credential state machine
========================

    Anonymous -> Authenticated(standard)              (login, no 2FA)
    Anonymous -> PendingVerification                  (login, 2FA required)
    PendingVerification -> Authenticated(standard)    (verify, correct code)
    Anonymous -> Authenticated(elevated)              (elevate, no 2FA)
    PendingVerification -> Authenticated(elevated)    (verify after elevate)
    Authenticated(*) -> Revoked                       (logout, delete account)

PendingVerification also ends silently when the code TTL elapses, and
ends with NotFoundError if the account is deleted or its password
changes before the code is submitted.
"""

import hashlib
import re
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .exceptions import ValidationError

EMAIL_MAX_LENGTH = 320
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
TWO_FA_CODE_LENGTH = 6

_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}$")
_ATTEMPT_ID_RE = re.compile(r"^[A-Za-z0-9_\-]{16,128}$")
_CODE_RE = re.compile(r"^\d{6}$")
_PASSWORD_CLASSES = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"\d"),
    re.compile(r"[^A-Za-z0-9]"),
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Timezone-aware current time; the default clock for use cases."""
    return datetime.now(timezone.utc)


class Scope(str, Enum):
    """
    Privilege level carried by a credential token.

    ELEVATED tokens are short-lived and required for sensitive
    account mutations (change password, delete account).
    """

    STANDARD = "standard"
    ELEVATED = "elevated"


@dataclass(frozen=True)
class Email:
    """
    Validated, normalized email address. Also the user's unique identity.

    Normalization is strip + lowercase, so comparison is case-insensitive.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError("Email must be a string")
        normalized = self.value.strip().lower()
        if not normalized or len(normalized) > EMAIL_MAX_LENGTH:
            raise ValidationError("Invalid email address")
        if not _EMAIL_RE.match(normalized):
            raise ValidationError("Invalid email address")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Password:
    """
    Validated plaintext password, held only in memory before hashing.

    Policy: 8-128 characters, no whitespace, and at least three of
    uppercase, lowercase, digit and symbol.
    """

    value: str = field(repr=False)

    def __post_init__(self) -> None:
        value = self.value
        if not isinstance(value, str):
            raise ValidationError("Password must be a string")
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if len(value) > PASSWORD_MAX_LENGTH:
            raise ValidationError(f"Password must be at most {PASSWORD_MAX_LENGTH} characters")
        if any(ch.isspace() for ch in value):
            raise ValidationError("Password must not contain whitespace")
        if sum(1 for rx in _PASSWORD_CLASSES if rx.search(value)) < 3:
            raise ValidationError(
                "Password must combine at least three of: uppercase, lowercase, digit, symbol"
            )

    def __str__(self) -> str:
        return "********"


@dataclass(frozen=True)
class TwoFaAttemptId:
    """
    Opaque handle returned instead of the email while 2FA is pending.

    Generated ids carry 256 bits of entropy (secrets.token_urlsafe(32)).
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _ATTEMPT_ID_RE.match(self.value):
            raise ValidationError("Invalid 2FA attempt id")

    @classmethod
    def generate(cls) -> "TwoFaAttemptId":
        return cls(secrets.token_urlsafe(32))

    def __str__(self) -> str:
        return self.value


def generate_two_fa_code() -> str:
    """
    Generate a cryptographically secure 6-digit code.

    Returns a string to preserve leading zeros.
    """
    return "".join(secrets.choice("0123456789") for _ in range(TWO_FA_CODE_LENGTH))


def parse_two_fa_code(raw: str) -> str:
    """Validate a caller-submitted 2FA code (exactly six digits)."""
    if not isinstance(raw, str):
        raise ValidationError("Invalid 2FA code")
    code = raw.strip()
    if not _CODE_RE.match(code):
        raise ValidationError("Invalid 2FA code")
    return code


def credential_fingerprint(password_hash: str) -> str:
    """
    SHA-256 of a stored password hash.

    Identifies the credential a 2FA challenge was started with without
    putting the hash itself into the challenge store. Any password
    change, or a deleted account re-created under the same email,
    yields a different fingerprint because every hash carries a fresh salt.
    """
    return hashlib.sha256(password_hash.encode()).hexdigest()


@dataclass(frozen=True)
class TwoFaCode:
    """
    Stored 2FA challenge: the one-time code and what it unlocks.

    The record remembers the scope it was issued for so that a
    challenge started by Elevate yields an elevated token on
    verification, without the caller having to say so again.
    credential_fingerprint and token_version pin the challenge to the
    account state at issue time.
    """

    attempt_id: TwoFaAttemptId
    code: str = field(repr=False)
    email: Email
    scope: Scope
    expires_at: datetime
    token_version: int = 0
    credential_fingerprint: str = field(default="", repr=False)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass
class User:
    """
    Persisted account.

    password_hash is an opaque string holding algorithm id, salt and digest.
    token_version is bumped when all outstanding tokens must stop working.
    """

    email: Email
    password_hash: str = field(repr=False)
    requires_2fa: bool = False
    token_version: int = 0


@dataclass(frozen=True)
class ValidatedUser:
    """Result of a successful credential check, before any 2FA step."""

    email: Email
    requires_2fa: bool
    token_version: int = 0
    credential_fingerprint: str = field(default="", repr=False)


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a credential token."""

    identity: Email
    scope: Scope
    token_id: str
    expires_at: datetime
    token_version: int = 0
