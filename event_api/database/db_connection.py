"""
PostgreSQL connection helper.
Provides a pooled Database object for use by the repositories.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2.extras import DictCursor
from psycopg2.pool import ThreadedConnectionPool


class DuplicateRecord(Exception):
    """Raised by a repository when an insert violates a unique constraint."""


class Database:
    """
    Thread-safe pool of psycopg2 connections with dictionary-based row access.

    Usage:
        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(...)

    The transaction is committed when the block exits normally and rolled
    back when it raises; the connection always goes back to the pool.

    The pool does not queue: once ``maxconn`` connections are checked out,
    ``connection()`` raises ``psycopg2.pool.PoolError`` (a ``psycopg2.Error``,
    so routes answer 500). Set ``DB_POOL_MAX`` to at least the number of
    worker threads serving requests.
    """

    def __init__(self, dsn: str, minconn: int = 1, maxconn: int = 10) -> None:
        try:
            self.pool = ThreadedConnectionPool(
                minconn, maxconn, dsn, cursor_factory=DictCursor
            )
        except psycopg2.Error as e:
            logging.error(f"Error connecting to database: {e}")
            # Re-raise the exception so the caller knows the connection failed
            raise

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        conn = self.pool.getconn()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self.pool.putconn(conn)

    def close(self) -> None:
        self.pool.closeall()
