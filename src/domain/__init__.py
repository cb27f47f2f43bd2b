"""
Domain layer - Pure business logic with zero framework imports.

This package contains the authentication state machine: value objects,
entities, the use cases and the AuthService facade over them. It defines
its own port interfaces for infrastructure abstraction, ensuring true
hexagonal architecture decoupling.
"""

from .auth_service import (
    AuthService,
    ChangePasswordInput,
    ElevateInput,
    LoginInput,
    SignupInput,
    TokenInput,
    Verify2FaInput,
)
from .exceptions import (
    AuthenticationError,
    AuthError,
    ConflictError,
    EmailDeliveryError,
    ExpiredError,
    InfrastructureError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .model import (
    Email,
    Password,
    Scope,
    TokenClaims,
    TwoFaAttemptId,
    TwoFaCode,
    User,
    ValidatedUser,
)
from .policy import AuthPolicy
from .ports import (
    BannedTokenStore,
    CredentialIssuer,
    EmailClient,
    PasswordHasher,
    TwoFaCodeStore,
    UserStore,
)
from .use_cases import Authenticated, TwoFaRequired

__all__ = [
    "AuthError",
    "AuthPolicy",
    "AuthService",
    "Authenticated",
    "AuthenticationError",
    "BannedTokenStore",
    "ChangePasswordInput",
    "ConflictError",
    "CredentialIssuer",
    "ElevateInput",
    "Email",
    "EmailClient",
    "EmailDeliveryError",
    "ExpiredError",
    "InfrastructureError",
    "LoginInput",
    "NotFoundError",
    "Password",
    "PasswordHasher",
    "PermissionDeniedError",
    "Scope",
    "SignupInput",
    "TokenClaims",
    "TokenInput",
    "TwoFaAttemptId",
    "TwoFaCode",
    "TwoFaCodeStore",
    "TwoFaRequired",
    "User",
    "UserStore",
    "ValidatedUser",
    "ValidationError",
    "Verify2FaInput",
]
