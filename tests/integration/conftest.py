"""
Shared fixtures for integration tests.

Requires PostgreSQL reachable at DATABASE_URL (via docker-compose).
Tests that need the database are skipped when it cannot be reached.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create a migrated connection pool, or skip if PostgreSQL is down."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=3):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the accounts and token tables before a test."""
    with pool.connection() as conn:
        conn.execute("TRUNCATE verification_tokens, accounts RESTART IDENTITY")
        conn.commit()
    yield
