"""
SQLite database shared by all repositories, and implementation of the
TransactionManager port.

All repositories of one application share a single connection. Every
repository call and every management-service operation runs inside
transaction(); nested blocks join the outermost one, which commits on
success and rolls back on any exception.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from booklog.domain.errors import InvalidArgumentError
from booklog.domain.ports import TransactionManager

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS authors (
        id TEXT PRIMARY KEY,
        first_name TEXT NOT NULL,
        last_name TEXT NOT NULL,
        birth_date TEXT,
        death_date TEXT,
        nationality TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS books (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        published TEXT NOT NULL,
        isbn TEXT NOT NULL,
        pages INTEGER NOT NULL CHECK (pages > 0),
        language TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS book_authors (
        book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
        author_id TEXT NOT NULL REFERENCES authors(id),
        PRIMARY KEY (book_id, author_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS series (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS series_books (
        series_id TEXT NOT NULL REFERENCES series(id) ON DELETE CASCADE,
        book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
        PRIMARY KEY (series_id, book_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS readings (
        id TEXT PRIMARY KEY,
        book_id TEXT NOT NULL REFERENCES books(id),
        beginning TEXT NOT NULL,
        end_date TEXT,
        pages_per_hour INTEGER NOT NULL CHECK (pages_per_hour > 0)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_book_authors_author ON book_authors(author_id)",
    "CREATE INDEX IF NOT EXISTS idx_series_books_book ON series_books(book_id)",
    "CREATE INDEX IF NOT EXISTS idx_readings_book ON readings(book_id)",
    "CREATE INDEX IF NOT EXISTS idx_readings_beginning ON readings(beginning)",
)


class SqliteDatabase(TransactionManager):
    """
    Owns the SQLite connection and the schema.

    Pass ":memory:" as db_path for a throw-away database (tests).
    The connection is shared across threads (FastAPI runs sync endpoints
    in a thread pool); a re-entrant lock serialises transactions.
    """

    def __init__(self, db_path: Union[Path, str]) -> None:
        """
        Open (and if needed create) the database at db_path.
        """
        self._db_path = str(db_path)
        if self._db_path != MEMORY:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row  # access columns by name
        self._conn.execute("PRAGMA foreign_keys = ON")

        self._lock = threading.RLock()
        self._depth = 0

        self._init_schema()

    @property
    def path(self) -> str:
        return self._db_path

    def _init_schema(self) -> None:
        """Create all tables and indexes if they don't exist."""
        with self.transaction() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
        logger.info("SQLite schema ready at %s", self._db_path)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Open or join a transaction and yield the connection.

        sqlite3 errors are translated for the domain: constraint violations
        become InvalidArgumentError, anything else RuntimeError.
        """
        with self._lock:
            outermost = self._depth == 0
            self._depth += 1
            try:
                yield self._conn
                if outermost:
                    self._conn.commit()
            except BaseException as e:
                if outermost:
                    self._conn.rollback()
                    logger.debug("Rolled back transaction: %s", e)
                if isinstance(e, sqlite3.IntegrityError):
                    raise InvalidArgumentError(f"Storage constraint violated: {e}") from e
                if isinstance(e, sqlite3.Error):
                    raise RuntimeError(f"Database error: {e}") from e
                raise
            finally:
                self._depth -= 1

    def close(self) -> None:
        with self._lock:
            self._conn.close()

