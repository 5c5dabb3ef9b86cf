"""
PostgreSQL repository adapter - Implements DocumentRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Storage layout:
---------------
Each resource is one table named after the resource value ("users",
"todos"). A row holds the store-assigned text identifier, the client fields
as a JSONB document, and an identity sequence number that fixes listing
order.
Identifiers are text, so an arbitrary client-supplied id simply matches no
row instead of failing a cast.

Any psycopg error is re-raised as the domain's RepositoryError; callers
never see driver exceptions.
"""

import logging
from pathlib import Path
from typing import Any

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool

from src.domain.exceptions import RepositoryError
from src.domain.ports import ID_FIELD, Document, Resource

logger = logging.getLogger(__name__)


def _to_document(row: tuple[str, dict[str, Any]]) -> Document:
    """Merge a (id, document) row into a single record."""
    record_id, document = row
    return {**document, ID_FIELD: record_id}


class PostgresDocumentRepository:
    """
    Implements DocumentRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries; table names come only from the
    Resource enum and are quoted with sql.Identifier.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_all(self, resource: Resource) -> list[Document]:
        query = sql.SQL("SELECT id, document FROM {} ORDER BY seq").format(
            sql.Identifier(resource.value)
        )
        rows = self._fetch(query, (), resource, "find_all")
        return [_to_document(row) for row in rows]

    def find_by_id(self, resource: Resource, record_id: str) -> Document | None:
        query = sql.SQL("SELECT id, document FROM {} WHERE id = %s").format(
            sql.Identifier(resource.value)
        )
        rows = self._fetch(query, (record_id,), resource, "find_by_id")
        return _to_document(rows[0]) if rows else None

    def create(self, resource: Resource, fields: dict[str, Any]) -> Document:
        """
        Insert a new document and return it with its assigned id.

        The id column defaults to gen_random_uuid()::text, so uniqueness is
        enforced by the primary key rather than by the caller.
        """
        query = sql.SQL("INSERT INTO {} (document) VALUES (%s) RETURNING id, document").format(
            sql.Identifier(resource.value)
        )
        rows = self._fetch(query, (Jsonb(fields),), resource, "create", commit=True)
        return _to_document(rows[0])

    def delete_by_id(self, resource: Resource, record_id: str) -> Document | None:
        query = sql.SQL("DELETE FROM {} WHERE id = %s RETURNING id, document").format(
            sql.Identifier(resource.value)
        )
        rows = self._fetch(query, (record_id,), resource, "delete_by_id", commit=True)
        return _to_document(rows[0]) if rows else None

    def _fetch(
        self,
        query: sql.Composed,
        params: tuple[Any, ...],
        resource: Resource,
        operation: str,
        commit: bool = False,
    ) -> list[tuple[str, dict[str, Any]]]:
        """Run one statement and return all rows, wrapping driver failures."""
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(query, params)
                rows = cursor.fetchall()
                if commit:
                    conn.commit()
                return rows
        except psycopg.Error as e:
            logger.error(f"Repository {operation} failed on {resource.value}: {e}")
            raise RepositoryError() from e


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
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
