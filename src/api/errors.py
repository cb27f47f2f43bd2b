"""
Domain error mapping - AuthError kinds to HTTP responses.

One handler translates every AuthError raised by the facade. Details are
generic where they could otherwise help enumerate accounts.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
    AuthenticationError,
    AuthError,
    ConflictError,
    ExpiredError,
    InfrastructureError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# (status code, public detail); None keeps the domain message
_ERROR_RESPONSES: dict[type[AuthError], tuple[int, str | None]] = {
    ValidationError: (422, None),
    AuthenticationError: (status.HTTP_401_UNAUTHORIZED, "Invalid credentials or token"),
    PermissionDeniedError: (status.HTTP_403_FORBIDDEN, "Elevated token required"),
    ConflictError: (status.HTTP_409_CONFLICT, "Signup failed"),
    NotFoundError: (status.HTTP_404_NOT_FOUND, "Not found"),
    ExpiredError: (status.HTTP_410_GONE, "Verification attempt expired"),
    InfrastructureError: (status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable"),
}


def status_for(exc: AuthError) -> tuple[int, str]:
    """Resolve the response for exc, walking its MRO for subclasses."""
    for cls in type(exc).__mro__:
        if cls in _ERROR_RESPONSES:
            code, detail = _ERROR_RESPONSES[cls]
            return code, detail if detail is not None else str(exc)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    code, detail = status_for(exc)
    if code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=code, content={"detail": detail}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the AuthError handler with a FastAPI app."""
    app.add_exception_handler(AuthError, auth_error_handler)
