"""
Shared fixtures for integration tests.

Requires PostgreSQL reachable at DATABASE_URL (e.g. via docker-compose);
every test in this directory is skipped when it is not.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresDocumentRepository, run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests, with tables migrated."""
    database_url = get_settings().database_url
    try:
        with psycopg.connect(database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not reachable: {e}")

    pool = ConnectionPool(conninfo=database_url, min_size=1, max_size=10, open=True)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def postgres_repository(pool: ConnectionPool) -> PostgresDocumentRepository:
    """Create repository instance for each test."""
    return PostgresDocumentRepository(pool)


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty both collections before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.execute("DELETE FROM todos")
    yield
