"""
Shared fixtures for integration tests.

Provides a PostgreSQL connection pool (migrated) and a clean user store.
Tests that need the database are skipped when PostgreSQL is unreachable.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import PostgresUserStore, run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    try:
        pool.wait(timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def user_store(pool: ConnectionPool) -> PostgresUserStore:
    """Store over an emptied users table."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
    return PostgresUserStore(pool)
