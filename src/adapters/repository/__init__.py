"""Repository adapters - Database implementations."""

from .postgres import PostgresDocumentRepository, run_migrations

__all__ = ["PostgresDocumentRepository", "run_migrations"]
