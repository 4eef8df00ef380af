"""
PostgreSQL repository adapters - Implement the AccountRepository and
TokenIssuer protocols.

This module provides the PostgreSQL implementations of the domain's
persistence ports using psycopg3 with raw SQL.

Race Closure
------------
The domain checks email/username availability and counts superadmins
before inserting. Those reads are not atomic with the insert, so this
adapter closes the gaps itself:

1. **UNIQUE constraints** on ``accounts.email`` and ``accounts.username``.
   A concurrent duplicate fails with UniqueViolation, which is mapped back
   to the same domain conflict the pre-check would have raised.

2. **Bootstrap advisory lock**: a SUPERADMIN insert takes a
   transaction-scoped advisory lock, re-counts superadmins and downgrades
   to USER if another transaction already committed one. Exactly one
   account ever receives SUPERADMIN through registration.
"""

import hashlib
import logging
import secrets
from pathlib import Path

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailAlreadyRegistered, UsernameAlreadyRegistered
from src.domain.ports import Account, Role

logger = logging.getLogger(__name__)

# Arbitrary application-wide key for pg_advisory_xact_lock
SUPERADMIN_BOOTSTRAP_LOCK_KEY = 7_310_416_001

_ACCOUNT_COLUMNS = "id, username, email, password_hash, role, is_verified, created_at"

_CONFLICTS = {
    "accounts_email_key": EmailAlreadyRegistered,
    "accounts_username_key": UsernameAlreadyRegistered,
}


def _row_to_account(row: tuple) -> Account:
    return Account(
        id=row[0],
        username=row[1],
        email=row[2],
        password_hash=row[3],
        role=Role(row[4]),
        is_verified=row[5],
        created_at=row[6],
    )


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Account | None:
        return self._find_one("email", email)

    def find_by_username(self, username: str) -> Account | None:
        return self._find_one("username", username)

    def count_by_role(self, role: Role) -> int:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT COUNT(*) FROM accounts WHERE role = %s", (role.value,))
            return cursor.fetchone()[0]

    def create(self, username: str, email: str, password_hash: str, role: Role) -> Account:
        """
        Insert a new account in a single transaction.

        SUPERADMIN inserts are serialized through an advisory lock and
        re-check the superadmin count after acquiring it.

        Args:
            username: Stripped username
            email: Normalized email address
            password_hash: bcrypt-hashed password from domain layer
            role: Role decided by the domain layer

        Returns:
            The stored Account (role may have been downgraded to USER)

        Raises:
            EmailAlreadyRegistered: accounts_email_key violated
            UsernameAlreadyRegistered: accounts_username_key violated
        """
        insert_sql = f"""
            INSERT INTO accounts (username, email, password_hash, role)
            VALUES (%s, %s, %s, %s)
            RETURNING {_ACCOUNT_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                if role == Role.SUPERADMIN:
                    role = self._lock_bootstrap(cursor)

                cursor.execute(insert_sql, (username, email, password_hash, role.value))
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            conflict = _CONFLICTS.get(e.diag.constraint_name)
            if conflict is None:
                raise
            logger.info("Insert rejected by unique constraint %s", e.diag.constraint_name)
            raise conflict() from None

        return _row_to_account(row)

    def _lock_bootstrap(self, cursor) -> Role:
        """
        Acquire the bootstrap lock and confirm no superadmin exists.

        The lock is released when the surrounding transaction ends.
        """
        cursor.execute("SELECT pg_advisory_xact_lock(%s)", (SUPERADMIN_BOOTSTRAP_LOCK_KEY,))
        cursor.execute(
            "SELECT COUNT(*) FROM accounts WHERE role = %s", (Role.SUPERADMIN.value,)
        )
        if cursor.fetchone()[0] > 0:
            logger.warning("Superadmin already exists; registering account as user")
            return Role.USER
        return Role.SUPERADMIN

    def _find_one(self, column: str, value: str) -> Account | None:
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE {column} = %s"
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (value,))
            row = cursor.fetchone()
        return _row_to_account(row) if row is not None else None


class PostgresTokenIssuer:
    """
    Implements TokenIssuer protocol via psycopg3.

    Tokens come from secrets.token_urlsafe(); only their SHA-256 digest
    is stored, together with the bound email and an expiry computed from
    database time.
    """

    def __init__(self, pool: ConnectionPool, ttl_seconds: int) -> None:
        self._pool = pool
        self._ttl_seconds = ttl_seconds

    def issue_verification_token(self, email: str) -> str:
        token = secrets.token_urlsafe(32)
        sql = """
            INSERT INTO verification_tokens (token_hash, email, expires_at)
            VALUES (%s, %s, NOW() + %s * INTERVAL '1 second')
        """
        with self._pool.connection() as conn:
            conn.execute(sql, (hash_token(token), email, self._ttl_seconds))
            conn.commit()
        return token


def hash_token(token: str) -> str:
    """Digest stored in place of a plaintext verification token."""
    return hashlib.sha256(token.encode()).hexdigest()


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
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
