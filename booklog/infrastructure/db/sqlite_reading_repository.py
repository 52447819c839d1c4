"""
SQLite implementation of the ReadingRepository port.
"""

import sqlite3
from datetime import date
from typing import List, Optional, Sequence
from uuid import UUID

from booklog.domain.entities import Book, Reading
from booklog.domain.ports import ReadingRepository

from .database import SqliteDatabase
from .sqlite_book_repository import books_by_ids

# Most recent reading first
READING_ORDER = "beginning DESC, id DESC"


class SqliteReadingRepository(ReadingRepository):
    """
    The end date is stored in the end_date column (END is an SQL keyword).
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def _reading_to_row(self, reading: Reading) -> dict:
        """Convert a Reading entity to a database row dict."""
        return {
            "id": str(reading.id),
            "book_id": str(reading.book.id),
            "beginning": reading.beginning.isoformat(),
            "end_date": reading.end.isoformat() if reading.end else None,
            "pages_per_hour": reading.pages_per_hour,
        }

    def _rows_to_readings(self, conn: sqlite3.Connection, rows: Sequence[sqlite3.Row]) -> List[Reading]:
        books = books_by_ids(conn, (row["book_id"] for row in rows))
        return [
            Reading(
                id=UUID(row["id"]),
                book=books[row["book_id"]],
                beginning=date.fromisoformat(row["beginning"]),
                end=date.fromisoformat(row["end_date"]) if row["end_date"] else None,
                pages_per_hour=row["pages_per_hour"],
            )
            for row in rows
        ]

    def save(self, reading: Reading) -> Reading:
        """
        Insert or update a reading.

        The book_id column is only written on insert.
        """
        with self._db.transaction() as conn:
            conn.execute("""
                INSERT INTO readings
                (id, book_id, beginning, end_date, pages_per_hour)
                VALUES
                (:id, :book_id, :beginning, :end_date, :pages_per_hour)
                ON CONFLICT(id) DO UPDATE SET
                    beginning=excluded.beginning,
                    end_date=excluded.end_date,
                    pages_per_hour=excluded.pages_per_hour
            """, self._reading_to_row(reading))
        return reading

    def get_by_id(self, reading_id: UUID) -> Optional[Reading]:
        with self._db.transaction() as conn:
            row = conn.execute(
                "SELECT * FROM readings WHERE id = ?",
                (str(reading_id),)
            ).fetchone()

            if row is None:
                return None

            return self._rows_to_readings(conn, [row])[0]

    def get_all(self) -> List[Reading]:
        with self._db.transaction() as conn:
            rows = conn.execute(f"SELECT * FROM readings ORDER BY {READING_ORDER}").fetchall()
            return self._rows_to_readings(conn, rows)

    def find_by_book(self, book: Book) -> List[Reading]:
        with self._db.transaction() as conn:
            rows = conn.execute(
                f"SELECT * FROM readings WHERE book_id = ? ORDER BY {READING_ORDER}",
                (str(book.id),)
            ).fetchall()
            return self._rows_to_readings(conn, rows)

    def find_in_progress(self) -> List[Reading]:
        with self._db.transaction() as conn:
            rows = conn.execute(
                f"SELECT * FROM readings WHERE end_date IS NULL ORDER BY {READING_ORDER}"
            ).fetchall()
            return self._rows_to_readings(conn, rows)

    def count(self) -> int:
        with self._db.transaction() as conn:
            result = conn.execute("SELECT COUNT(*) AS cnt FROM readings").fetchone()
            return result["cnt"]

    def delete(self, reading: Reading) -> None:
        self.delete_by_id(reading.id)

    def delete_by_id(self, reading_id: UUID) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM readings WHERE id = ?",
                (str(reading_id),)
            )
            return cursor.rowcount > 0
