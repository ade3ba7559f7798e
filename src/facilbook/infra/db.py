"""Database access layer using psycopg2.

Provides:
- Store: explicitly owned connection pool (open at startup, close at shutdown)
- Store.txn(): Context manager for short, safe transactions
- fetchone/fetchall: Query helpers
- advisory_xact_lock(): transaction-scoped advisory lock helper
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Iterator, Sequence
from urllib.parse import urlparse

import psycopg2
from psycopg2.extensions import cursor as PgCursor
from psycopg2.pool import ThreadedConnectionPool

from facilbook.domain.errors import StoreError
from facilbook.observability.logging import get_logger

logger = get_logger(__name__)


def _dsn_has_password(dsn: str) -> bool:
    if "://" in dsn:
        return bool(urlparse(dsn).password)
    return any(token.startswith("password=") for token in dsn.split())


def connect_kwargs(dsn: str) -> dict[str, str]:
    """Extra keyword arguments for psycopg2.connect.

    DB_PASSWORD is injected only when the DSN does not carry a password.
    """
    db_password = os.environ.get("DB_PASSWORD", "")
    if db_password and not _dsn_has_password(dsn):
        return {"password": db_password}
    return {}


class Store:
    """PostgreSQL store backed by a psycopg2 connection pool.

    The store is constructed once per process and handed to the
    facility registry and the reservation ledger. It must be opened
    before use and closed at shutdown.
    """

    def __init__(self, dsn: str, *, minconn: int = 1, maxconn: int = 10) -> None:
        self.dsn = dsn
        self.minconn = minconn
        self.maxconn = maxconn
        self._pool: ThreadedConnectionPool | None = None

    @classmethod
    def from_settings(cls, settings) -> "Store":
        return cls(
            settings.database_url,
            minconn=settings.db_pool_min,
            maxconn=settings.db_pool_max,
        )

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> None:
        """Create the connection pool.

        Raises:
            RuntimeError: If DATABASE_URL is not set.
            psycopg2.Error: On connection failure.
        """
        if self._pool is not None:
            return
        if not self.dsn:
            raise RuntimeError("DATABASE_URL environment variable not set")
        self._pool = ThreadedConnectionPool(
            self.minconn,
            self.maxconn,
            self.dsn,
            **connect_kwargs(self.dsn),
        )
        logger.info(
            "store opened",
            extra={"extra_fields": {"minconn": self.minconn, "maxconn": self.maxconn}},
        )

    def close(self) -> None:
        if self._pool is None:
            return
        self._pool.closeall()
        self._pool = None
        logger.info("store closed")

    @contextmanager
    def txn(self) -> Iterator[PgCursor]:
        """Context manager for a short, safe transaction.

        Commits on successful exit, rolls back on exception.
        Driver errors are re-raised as StoreError.

        Yields:
            Cursor for executing queries within the transaction.

        Example:
            with store.txn() as cur:
                cur.execute("DELETE FROM reservations WHERE id = %s", (1,))
        """
        if self._pool is None:
            raise StoreError("store is not open")

        try:
            conn = self._pool.getconn()
        except psycopg2.Error as exc:
            logger.error(
                "store connection unavailable",
                extra={"extra_fields": {"error_type": type(exc).__name__}},
            )
            raise StoreError("database connection unavailable") from exc

        try:
            with conn.cursor() as cur:
                yield cur
            conn.commit()
        except psycopg2.Error as exc:
            conn.rollback()
            logger.error(
                "store operation failed",
                extra={
                    "extra_fields": {
                        "error_type": type(exc).__name__,
                        "pgcode": getattr(exc, "pgcode", None),
                    }
                },
            )
            raise StoreError("database operation failed") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            self._pool.putconn(conn)


def fetchone(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> tuple[Any, ...] | None:
    """Execute query and fetch one row.

    Args:
        cur: Database cursor.
        query: SQL query with %s placeholders.
        params: Query parameters.

    Returns:
        Single row tuple or None if no results.
    """
    cur.execute(query, params)
    return cur.fetchone()


def fetchall(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> list[tuple[Any, ...]]:
    """Execute query and fetch all rows.

    Args:
        cur: Database cursor.
        query: SQL query with %s placeholders.
        params: Query parameters.

    Returns:
        List of row tuples.
    """
    cur.execute(query, params)
    return cur.fetchall()


def advisory_xact_lock(cur: PgCursor, key: str) -> None:
    """Take a transaction-scoped advisory lock on an arbitrary text key.

    The lock is released automatically at commit/rollback.
    """
    cur.execute("SELECT pg_advisory_xact_lock(hashtext(%s))", (key,))
