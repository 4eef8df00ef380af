"""Repository adapters - Database implementations."""

from .postgres import PostgresAccountRepository, PostgresTokenIssuer, run_migrations

__all__ = ["PostgresAccountRepository", "PostgresTokenIssuer", "run_migrations"]
