"""
Unit tests for Login/Elevate use cases and credential checking.

Tests domain logic with mocked ports to verify:
- Unknown emails still pay the hash cost (reference hash)
- Identical failures for unknown email and wrong password
- 2FA challenge issuing and rollback on delivery failure
- Scope and TTL of minted tokens
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from src.domain.authentication import (
    INVALID_CREDENTIALS,
    TWO_FA_EMAIL_SUBJECT,
    CredentialVerifier,
    TwoFaChallenger,
)
from src.domain.exceptions import AuthenticationError, EmailDeliveryError, ValidationError
from src.domain.model import Email, Password, Scope, User, ValidatedUser, credential_fingerprint
from src.domain.policy import AuthPolicy
from src.domain.use_cases import Authenticated, ElevateUseCase, LoginUseCase, TwoFaRequired

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
POLICY = AuthPolicy(revoke_tokens_on_password_change=False)


def make_verifier(user: User | None, matches: bool = True) -> tuple[CredentialVerifier, Mock]:
    user_store = Mock()
    user_store.get.return_value = user
    hasher = Mock()
    hasher.verify.return_value = matches
    return CredentialVerifier(user_store=user_store, hasher=hasher, reference_hash="REF"), hasher


def make_challenger() -> tuple[TwoFaChallenger, Mock, Mock]:
    store = Mock()
    email_client = Mock()
    challenger = TwoFaChallenger(
        two_fa_store=store, email_client=email_client, ttl_seconds=600, clock=lambda: NOW
    )
    return challenger, store, email_client


class TestCredentialVerifier:
    """Tests for timing-safe credential checks."""

    def test_unknown_email_verifies_against_reference_hash(self) -> None:
        """Hash work is done even when no user exists."""
        verifier, hasher = make_verifier(user=None, matches=True)

        with pytest.raises(AuthenticationError, match=INVALID_CREDENTIALS):
            verifier.check(Email("ghost@example.com"), Password("Secret123!"))

        hasher.verify.assert_called_once_with("Secret123!", "REF")

    def test_wrong_password_raises_same_error(self) -> None:
        user = User(email=Email("a@x.com"), password_hash="HASH")
        verifier, hasher = make_verifier(user=user, matches=False)

        with pytest.raises(AuthenticationError, match=INVALID_CREDENTIALS):
            verifier.check(Email("a@x.com"), Password("Secret123!"))

        hasher.verify.assert_called_once_with("Secret123!", "HASH")

    def test_success_returns_validated_user(self) -> None:
        user = User(email=Email("a@x.com"), password_hash="HASH", requires_2fa=True, token_version=3)
        verifier, _ = make_verifier(user=user)

        validated = verifier.check(Email("a@x.com"), Password("Secret123!"))

        assert validated == ValidatedUser(
            email=Email("a@x.com"),
            requires_2fa=True,
            token_version=3,
            credential_fingerprint=credential_fingerprint("HASH"),
        )


class TestTwoFaChallenger:
    """Tests for storing and emailing 2FA codes."""

    def test_stores_then_sends(self) -> None:
        challenger, store, email_client = make_challenger()
        user = ValidatedUser(
            email=Email("a@x.com"), requires_2fa=True, token_version=2, credential_fingerprint="FP"
        )

        attempt_id = challenger.issue(user, Scope.ELEVATED)

        stored, ttl = store.put.call_args[0]
        assert ttl == 600
        assert stored.attempt_id == attempt_id
        assert stored.scope is Scope.ELEVATED
        assert stored.token_version == 2
        assert stored.credential_fingerprint == "FP"
        assert stored.expires_at == NOW + timedelta(seconds=600)

        recipient, subject, body = email_client.send.call_args[0]
        assert recipient == Email("a@x.com")
        assert subject == TWO_FA_EMAIL_SUBJECT
        assert stored.code in body
        assert attempt_id.value in body

    def test_delivery_failure_discards_stored_code(self) -> None:
        challenger, store, email_client = make_challenger()
        email_client.send.side_effect = EmailDeliveryError("smtp down")
        user = ValidatedUser(email=Email("a@x.com"), requires_2fa=True)

        with pytest.raises(EmailDeliveryError):
            challenger.issue(user, Scope.STANDARD)

        stored = store.put.call_args[0][0]
        store.delete.assert_called_once_with(stored.attempt_id)


class TestLoginUseCase:
    """Tests for login outcomes."""

    def test_mints_standard_token_without_two_fa(self) -> None:
        user = User(email=Email("a@x.com"), password_hash="HASH", token_version=1)
        verifier, _ = make_verifier(user=user)
        challenger, _, _ = make_challenger()
        issuer = Mock()
        issuer.mint.return_value = "signed.token"

        use_case = LoginUseCase(
            credentials=verifier, challenger=challenger, issuer=issuer, policy=POLICY
        )
        outcome = use_case.execute("A@X.com", "Secret123!")

        assert outcome == Authenticated(token="signed.token", scope=Scope.STANDARD)
        issuer.mint.assert_called_once_with(
            Email("a@x.com"), Scope.STANDARD, POLICY.standard_token_ttl_seconds, 1
        )

    def test_two_fa_user_gets_challenge_not_token(self) -> None:
        user = User(email=Email("a@x.com"), password_hash="HASH", requires_2fa=True)
        verifier, _ = make_verifier(user=user)
        challenger, store, _ = make_challenger()
        issuer = Mock()

        use_case = LoginUseCase(
            credentials=verifier, challenger=challenger, issuer=issuer, policy=POLICY
        )
        outcome = use_case.execute("a@x.com", "Secret123!")

        assert isinstance(outcome, TwoFaRequired)
        assert store.put.call_args[0][0].scope is Scope.STANDARD
        issuer.mint.assert_not_called()

    def test_malformed_email_fails_validation(self) -> None:
        verifier, hasher = make_verifier(user=None)
        challenger, _, _ = make_challenger()

        use_case = LoginUseCase(
            credentials=verifier, challenger=challenger, issuer=Mock(), policy=POLICY
        )
        with pytest.raises(ValidationError):
            use_case.execute("nope", "Secret123!")

        hasher.verify.assert_not_called()


class TestElevateUseCase:
    """Tests for elevation."""

    def test_mints_elevated_token_with_short_ttl(self) -> None:
        user = User(email=Email("a@x.com"), password_hash="HASH")
        verifier, _ = make_verifier(user=user)
        challenger, _, _ = make_challenger()
        issuer = Mock()
        issuer.mint.return_value = "elevated.token"

        use_case = ElevateUseCase(
            credentials=verifier, challenger=challenger, issuer=issuer, policy=POLICY
        )
        outcome = use_case.execute("a@x.com", "Secret123!")

        assert outcome == Authenticated(token="elevated.token", scope=Scope.ELEVATED)
        issuer.mint.assert_called_once_with(
            Email("a@x.com"), Scope.ELEVATED, POLICY.elevated_token_ttl_seconds, 0
        )

    def test_two_fa_is_not_bypassed(self) -> None:
        user = User(email=Email("a@x.com"), password_hash="HASH", requires_2fa=True)
        verifier, _ = make_verifier(user=user)
        challenger, store, _ = make_challenger()
        issuer = Mock()

        use_case = ElevateUseCase(
            credentials=verifier, challenger=challenger, issuer=issuer, policy=POLICY
        )
        outcome = use_case.execute("a@x.com", "Secret123!")

        assert isinstance(outcome, TwoFaRequired)
        assert store.put.call_args[0][0].scope is Scope.ELEVATED
        issuer.mint.assert_not_called()
