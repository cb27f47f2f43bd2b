"""
PostgreSQL repository adapter - Implements UserStore protocol.

This module provides the PostgreSQL implementation of the domain's
user store port using psycopg3 with raw SQL.

Concurrency Design - Atomic Uniqueness:
--------------------------------------
create() uses INSERT ... ON CONFLICT (email) DO NOTHING. The PRIMARY KEY
on email makes the database the single arbiter: of any number of
concurrent signups for one address exactly one row is inserted, and the
others observe rowcount == 0. There is no read-then-insert window.

Every driver failure (connection refused, pool timeout, query error) is
translated into the domain's InfrastructureError.
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool, PoolTimeout

from src.domain.exceptions import InfrastructureError
from src.domain.model import Email, User

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (psycopg.Error, PoolTimeout)


class PostgresUserStore:
    """
    Implements UserStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def get(self, email: Email) -> User | None:
        sql = """
            SELECT email, password_hash, requires_2fa, token_version
            FROM users
            WHERE email = %s
        """
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email.value,))
                row = cursor.fetchone()
        except _DRIVER_ERRORS as exc:
            logger.error("User lookup failed: %s", exc)
            raise InfrastructureError("User store unavailable") from exc

        if row is None:
            return None
        return User(
            email=Email(row[0]),
            password_hash=row[1],
            requires_2fa=row[2],
            token_version=row[3],
        )

    def create(self, user: User) -> bool:
        """
        Atomically insert a new user.

        Returns:
            True if inserted, False if the email already exists
        """
        sql = """
            INSERT INTO users (email, password_hash, requires_2fa, token_version, created_at, updated_at)
            VALUES (%s, %s, %s, %s, NOW(), NOW())
            ON CONFLICT (email) DO NOTHING
        """
        params = (user.email.value, user.password_hash, user.requires_2fa, user.token_version)
        return self._execute(sql, params, "User insert") == 1

    def update(self, user: User) -> bool:
        sql = """
            UPDATE users
            SET password_hash = %s, requires_2fa = %s, token_version = %s, updated_at = NOW()
            WHERE email = %s
        """
        params = (user.password_hash, user.requires_2fa, user.token_version, user.email.value)
        return self._execute(sql, params, "User update") == 1

    def delete(self, email: Email) -> bool:
        sql = "DELETE FROM users WHERE email = %s"
        return self._execute(sql, (email.value,), "User delete") == 1

    def _execute(self, sql: str, params: tuple, operation: str) -> int:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                conn.commit()
                return cursor.rowcount
        except _DRIVER_ERRORS as exc:
            logger.error("%s failed: %s", operation, exc)
            raise InfrastructureError("User store unavailable") from exc


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
            logger.info("Migration complete: %s", sql_file.name)
        except _DRIVER_ERRORS as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
