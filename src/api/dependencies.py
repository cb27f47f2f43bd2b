"""
FastAPI dependencies - Dependency injection factories.

This module wires concrete adapters into the AuthService facade and
provides Depends() factories for injecting it (and the presented
bearer token) into routes.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool
from redis import Redis

from src.adapters.cache.redis_stores import RedisBannedTokenStore, RedisTwoFaCodeStore
from src.adapters.repository.postgres import PostgresUserStore
from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.security.jwt_issuer import JwtCredentialIssuer
from src.adapters.smtp.console import ConsoleEmailClient
from src.adapters.smtp.postmark import PostmarkEmailClient
from src.config.settings import Settings
from src.domain.auth_service import AuthService
from src.domain.model import Email
from src.domain.ports import EmailClient


def build_email_client(settings: Settings) -> EmailClient:
    """Postmark when a server token is configured, console logging otherwise."""
    if settings.postmark_server_token:
        return PostmarkEmailClient(
            server_token=settings.postmark_server_token,
            sender=Email(settings.email_sender),
            base_url=settings.postmark_base_url,
            timeout=settings.email_timeout_seconds,
        )
    return ConsoleEmailClient()


def build_auth_service(
    settings: Settings,
    pool: ConnectionPool,
    redis_client: Redis,
    email_client: EmailClient | None = None,
) -> AuthService:
    """
    Compose the facade from production adapters.

    Called once at startup; the resulting service is shared by all requests.
    The caller owns email_client and closes it on shutdown; one is built
    from settings when omitted.
    """
    return AuthService(
        user_store=PostgresUserStore(pool),
        banned_tokens=RedisBannedTokenStore(redis_client),
        two_fa_store=RedisTwoFaCodeStore(redis_client),
        email_client=email_client or build_email_client(settings),
        issuer=JwtCredentialIssuer(settings.jwt_secret, settings.jwt_algorithm),
        hasher=BcryptPasswordHasher(settings.bcrypt_cost),
        policy=settings.auth_policy(),
    )


def get_auth_service(request: Request) -> AuthService:
    """
    Get the shared AuthService from app state.

    The service is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.auth_service


# Bearer security scheme for OpenAPI documentation
http_bearer = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> str:
    """
    Extract the raw token from the Authorization: Bearer header.

    Returns 401 when the header is missing or uses another scheme;
    token validity itself is decided by the domain.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials
