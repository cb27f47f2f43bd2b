"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Shape checks only; the domain value objects enforce the actual policy.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """Request model for account creation."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128, description="Account password")
    requires_2fa: bool = Field(False, description="Require an emailed code on every login")


class SignupResponse(BaseModel):
    """Response model for successful signup."""

    message: str
    email: str


class CredentialsRequest(BaseModel):
    """Request model for login and elevation."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Response model when a bearer token was issued."""

    token: str
    token_type: str = "bearer"
    scope: str


class TwoFaRequiredResponse(BaseModel):
    """Response model when a 2FA code was emailed."""

    message: str
    attempt_id: str


class Verify2FaRequest(BaseModel):
    """Request model for 2FA verification."""

    attempt_id: str = Field(..., min_length=16, max_length=128)
    code: str = Field(
        ...,
        min_length=6,
        max_length=6,
        pattern=r"^\d{6}$",
        description="6-digit code from the email",
    )


class ChangePasswordRequest(BaseModel):
    """Request model for password change (elevated bearer token required)."""

    new_password: str = Field(..., min_length=8, max_length=128)


class VerifyTokenRequest(BaseModel):
    """Request model for token verification."""

    token: str = Field(..., min_length=1)


class TokenStatusResponse(BaseModel):
    """Response model for a valid token."""

    email: str
    scope: str
    expires_at: datetime


class MessageResponse(BaseModel):
    """Generic success response."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
