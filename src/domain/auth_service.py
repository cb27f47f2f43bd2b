"""
Authentication facade - one cohesive API over the use cases.

Front ends (HTTP, CLI, RPC) talk only to AuthService. Each operation
takes a plain input record and returns a success value or raises a
typed AuthError; there is no partial success.

The facade holds no mutable state: ports are injected, configuration
arrives as an immutable AuthPolicy, and use cases are built once here.
"""

from dataclasses import dataclass

from .authentication import REFERENCE_PASSWORD, CredentialVerifier, TwoFaChallenger
from .authorization import TokenAuthorizer
from .model import Clock, Email, TokenClaims, utc_now
from .policy import AuthPolicy
from .ports import (
    BannedTokenStore,
    CredentialIssuer,
    EmailClient,
    PasswordHasher,
    TwoFaCodeStore,
    UserStore,
)
from .use_cases import (
    Authenticated,
    ChangePasswordUseCase,
    DeleteAccountUseCase,
    ElevateUseCase,
    LoginOutcome,
    LoginUseCase,
    LogoutUseCase,
    SignupUseCase,
    Verify2FaUseCase,
    VerifyElevatedTokenUseCase,
    VerifyTokenUseCase,
)


@dataclass(frozen=True)
class SignupInput:
    email: str
    password: str
    requires_2fa: bool = False


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


@dataclass(frozen=True)
class ElevateInput:
    email: str
    password: str


@dataclass(frozen=True)
class Verify2FaInput:
    attempt_id: str
    code: str


@dataclass(frozen=True)
class TokenInput:
    """Input for operations that only need the presented bearer token."""

    token: str


@dataclass(frozen=True)
class ChangePasswordInput:
    token: str
    new_password: str


class AuthService:
    """
    Orchestration facade for signup, login, 2FA, logout and elevation.

    Usage:
        service = AuthService(
            user_store=..., banned_tokens=..., two_fa_store=...,
            email_client=..., issuer=..., hasher=...,
            policy=AuthPolicy(revoke_tokens_on_password_change=False),
        )
        outcome = service.login(LoginInput("a@x.com", "Secret123!"))
    """

    def __init__(
        self,
        *,
        user_store: UserStore,
        banned_tokens: BannedTokenStore,
        two_fa_store: TwoFaCodeStore,
        email_client: EmailClient,
        issuer: CredentialIssuer,
        hasher: PasswordHasher,
        policy: AuthPolicy,
        clock: Clock = utc_now,
    ) -> None:
        self.policy = policy

        credentials = CredentialVerifier(
            user_store=user_store,
            hasher=hasher,
            reference_hash=hasher.hash(REFERENCE_PASSWORD),
        )
        challenger = TwoFaChallenger(
            two_fa_store=two_fa_store,
            email_client=email_client,
            ttl_seconds=policy.two_fa_code_ttl_seconds,
            clock=clock,
        )
        authorizer = TokenAuthorizer(
            issuer=issuer,
            banned_tokens=banned_tokens,
            user_store=user_store,
            policy=policy,
        )

        self._signup = SignupUseCase(user_store=user_store, hasher=hasher)
        self._login = LoginUseCase(
            credentials=credentials, challenger=challenger, issuer=issuer, policy=policy
        )
        self._elevate = ElevateUseCase(
            credentials=credentials, challenger=challenger, issuer=issuer, policy=policy
        )
        self._verify_2fa = Verify2FaUseCase(
            two_fa_store=two_fa_store,
            user_store=user_store,
            issuer=issuer,
            policy=policy,
            clock=clock,
        )
        self._logout = LogoutUseCase(
            authorizer=authorizer, banned_tokens=banned_tokens, clock=clock
        )
        self._change_password = ChangePasswordUseCase(
            authorizer=authorizer, user_store=user_store, hasher=hasher, policy=policy
        )
        self._delete_account = DeleteAccountUseCase(
            authorizer=authorizer, user_store=user_store, banned_tokens=banned_tokens, clock=clock
        )
        self._verify_token = VerifyTokenUseCase(authorizer=authorizer)
        self._verify_elevated_token = VerifyElevatedTokenUseCase(authorizer=authorizer)

    def signup(self, data: SignupInput) -> Email:
        return self._signup.execute(data.email, data.password, data.requires_2fa)

    def login(self, data: LoginInput) -> LoginOutcome:
        return self._login.execute(data.email, data.password)

    def elevate(self, data: ElevateInput) -> LoginOutcome:
        return self._elevate.execute(data.email, data.password)

    def verify_2fa(self, data: Verify2FaInput) -> Authenticated:
        return self._verify_2fa.execute(data.attempt_id, data.code)

    def logout(self, data: TokenInput) -> None:
        self._logout.execute(data.token)

    def change_password(self, data: ChangePasswordInput) -> None:
        self._change_password.execute(data.token, data.new_password)

    def delete_account(self, data: TokenInput) -> None:
        self._delete_account.execute(data.token)

    def verify_token(self, data: TokenInput) -> TokenClaims:
        return self._verify_token.execute(data.token)

    def verify_elevated_token(self, data: TokenInput) -> TokenClaims:
        return self._verify_elevated_token.execute(data.token)
