"""
FastAPI application for the authentication service.

Wires the lifespan (connection pool, migrations, Redis client, shared
AuthService), the AuthError handler, the v1 router and a health probe.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool, PoolTimeout
from redis import Redis
from redis.exceptions import RedisError

from src.adapters.repository.postgres import run_migrations
from src.adapters.smtp.postmark import PostmarkEmailClient
from src.api.dependencies import build_auth_service, build_email_client
from src.api.errors import register_exception_handlers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Authentication API v1 - Signup, login with 2FA, elevation and revocation",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open backing stores and build the AuthService shared by all requests.

    Migrations run before the first request is served. Pool, Redis
    client and the Postmark HTTP client are closed on shutdown.
    """
    settings = get_settings()

    logger.info("Connecting to PostgreSQL (pool %d-%d)", settings.pool_min_size, settings.pool_max_size)
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    run_migrations(pool)

    logger.info("Connecting to Redis")
    redis_client = Redis.from_url(settings.redis_url)

    email_client = build_email_client(settings)

    app.state.pool = pool
    app.state.redis = redis_client
    app.state.email_client = email_client
    app.state.auth_service = build_auth_service(settings, pool, redis_client, email_client)
    logger.info("Authentication service ready")

    try:
        yield
    finally:
        if isinstance(email_client, PostmarkEmailClient):
            email_client.close()
        redis_client.close()
        pool.close()
        logger.info("Backing store connections closed")


app = FastAPI(
    title="authgate",
    description="Authentication API - signup, login with optional 2FA, elevation and token revocation",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(v1_router, prefix="/v1")


def _probe_database(request: Request) -> bool:
    try:
        with request.app.state.pool.connection() as conn:
            conn.execute("SELECT 1")
    except (psycopg.Error, PoolTimeout) as exc:
        logger.error("Database health check failed: %s", exc)
        return False
    return True


def _probe_redis(request: Request) -> bool:
    try:
        request.app.state.redis.ping()
    except RedisError as exc:
        logger.error("Redis health check failed: %s", exc)
        return False
    return True


@app.get("/health")
def health_check(request: Request) -> JSONResponse:
    """
    Report database and Redis reachability.

    200 when both respond, 503 with the failing component otherwise.
    """
    checks = {
        "database": "ok" if _probe_database(request) else "unavailable",
        "redis": "ok" if _probe_redis(request) else "unavailable",
    }
    healthy = all(state == "ok" for state in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "healthy" if healthy else "degraded", **checks},
    )
