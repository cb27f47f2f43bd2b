"""
API v1 routes.

Defines REST endpoints over the AuthService facade. Routes only
translate HTTP to facade input records and back; domain errors are
mapped to status codes by src.api.errors.
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_auth_service, get_bearer_token
from src.api.models import (
    ChangePasswordRequest,
    CredentialsRequest,
    ErrorResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    TokenStatusResponse,
    TwoFaRequiredResponse,
    Verify2FaRequest,
    VerifyTokenRequest,
)
from src.domain.auth_service import (
    AuthService,
    ChangePasswordInput,
    ElevateInput,
    LoginInput,
    SignupInput,
    TokenInput,
    Verify2FaInput,
)
from src.domain.model import TokenClaims
from src.domain.use_cases import Authenticated, LoginOutcome

router = APIRouter(tags=["v1"])

_UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Invalid credentials or token"}}
_ELEVATED_ONLY = {
    **_UNAUTHORIZED,
    403: {"model": ErrorResponse, "description": "Elevated token required"},
}


def _login_response(outcome: LoginOutcome, response: Response) -> TokenResponse | TwoFaRequiredResponse:
    if isinstance(outcome, Authenticated):
        return TokenResponse(token=outcome.token, scope=outcome.scope.value)
    response.status_code = status.HTTP_206_PARTIAL_CONTENT
    return TwoFaRequiredResponse(
        message="2FA required",
        attempt_id=outcome.attempt_id.value,
    )


def _token_status(claims: TokenClaims) -> TokenStatusResponse:
    return TokenStatusResponse(
        email=claims.identity.value,
        scope=claims.scope.value,
        expires_at=claims.expires_at,
    )


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"description": "Validation error"},
    },
    summary="Create an account",
)
def signup(
    request_data: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> SignupResponse:
    email = service.signup(
        SignupInput(
            email=request_data.email,
            password=request_data.password,
            requires_2fa=request_data.requires_2fa,
        )
    )
    return SignupResponse(message="User created successfully", email=email.value)


@router.post(
    "/login",
    response_model=TokenResponse | TwoFaRequiredResponse,
    responses={
        206: {"model": TwoFaRequiredResponse, "description": "2FA code sent"},
        **_UNAUTHORIZED,
    },
    summary="Log in with email and password",
)
def login(
    request_data: CredentialsRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse | TwoFaRequiredResponse:
    """
    Returns a standard bearer token, or 206 with an attempt id when the
    account requires 2FA.
    """
    outcome = service.login(LoginInput(email=request_data.email, password=request_data.password))
    return _login_response(outcome, response)


@router.post(
    "/verify-2fa",
    response_model=TokenResponse,
    responses={
        **_UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "Unknown, used or expired attempt"},
    },
    summary="Exchange an emailed 2FA code for a token",
)
def verify_2fa(
    request_data: Verify2FaRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    result = service.verify_2fa(
        Verify2FaInput(attempt_id=request_data.attempt_id, code=request_data.code)
    )
    return TokenResponse(token=result.token, scope=result.scope.value)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses=_UNAUTHORIZED,
    summary="Revoke the presented bearer token",
)
def logout(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.logout(TokenInput(token=token))
    return MessageResponse(message="Logged out")


@router.post(
    "/elevate",
    response_model=TokenResponse | TwoFaRequiredResponse,
    responses={
        206: {"model": TwoFaRequiredResponse, "description": "2FA code sent"},
        **_UNAUTHORIZED,
    },
    summary="Re-authenticate for a short-lived elevated token",
)
def elevate(
    request_data: CredentialsRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse | TwoFaRequiredResponse:
    outcome = service.elevate(ElevateInput(email=request_data.email, password=request_data.password))
    return _login_response(outcome, response)


@router.patch(
    "/change-password",
    response_model=MessageResponse,
    responses=_ELEVATED_ONLY,
    summary="Change password (elevated token required)",
)
def change_password(
    request_data: ChangePasswordRequest,
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.change_password(ChangePasswordInput(token=token, new_password=request_data.new_password))
    return MessageResponse(message="Password changed")


@router.delete(
    "/delete-account",
    response_model=MessageResponse,
    responses=_ELEVATED_ONLY,
    summary="Delete the account (elevated token required)",
)
def delete_account(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.delete_account(TokenInput(token=token))
    return MessageResponse(message="Account deleted")


@router.post(
    "/verify-token",
    response_model=TokenStatusResponse,
    responses=_UNAUTHORIZED,
    summary="Check that a token is valid and not revoked",
)
def verify_token(
    request_data: VerifyTokenRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenStatusResponse:
    return _token_status(service.verify_token(TokenInput(token=request_data.token)))


@router.post(
    "/verify-elevated-token",
    response_model=TokenStatusResponse,
    responses=_ELEVATED_ONLY,
    summary="Check that a token is valid, not revoked and elevated",
)
def verify_elevated_token(
    request_data: VerifyTokenRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenStatusResponse:
    return _token_status(service.verify_elevated_token(TokenInput(token=request_data.token)))
