"""
Domain exceptions - Semantic error types for authentication.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Every use case either fully succeeds or raises one of these.
"""


class AuthError(Exception):
    """Base class for authentication domain errors."""

    pass


class ValidationError(AuthError):
    """Malformed email, password, attempt id or code input."""

    pass


class AuthenticationError(AuthError):
    """
    Credential mismatch, invalid/expired/revoked token, or wrong 2FA code.

    Raised with the same message for unknown email and wrong password
    so callers cannot enumerate accounts.
    """

    pass


class ConflictError(AuthError):
    """Email is already registered."""

    pass


class NotFoundError(AuthError):
    """2FA attempt or account no longer resolvable."""

    pass


class ExpiredError(AuthError):
    """2FA attempt was found but its TTL has elapsed."""

    pass


class PermissionDeniedError(AuthError):
    """Valid token but insufficient scope for an elevated-only operation."""

    pass


class InfrastructureError(AuthError):
    """A port call failed (store unreachable, timeout, delivery failure)."""

    pass


class EmailDeliveryError(InfrastructureError):
    """Email client could not deliver the message."""

    pass
