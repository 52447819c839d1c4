"""
SQLite implementation of the SeriesRepository port.
"""

import sqlite3
from collections import defaultdict
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from booklog.domain.entities import Book, Series
from booklog.domain.ports import SeriesRepository

from .database import SqliteDatabase
from .sqlite_book_repository import books_by_ids

SERIES_ORDER = "series.title COLLATE NOCASE, series.id"


def rows_to_series(conn: sqlite3.Connection, rows: Sequence[sqlite3.Row]) -> List[Series]:
    """Convert rows of the series table to Series entities with their books."""
    if not rows:
        return []

    series_ids = [row["id"] for row in rows]
    placeholders = ", ".join("?" * len(series_ids))
    links = conn.execute(
        f"SELECT series_id, book_id FROM series_books WHERE series_id IN ({placeholders})",
        series_ids,
    ).fetchall()

    books = books_by_ids(conn, (link["book_id"] for link in links))
    books_of: Dict[str, List[Book]] = defaultdict(list)
    for link in links:
        books_of[link["series_id"]].append(books[link["book_id"]])

    return [
        Series(id=UUID(row["id"]), title=row["title"], books=books_of[row["id"]])
        for row in rows
    ]


class SqliteSeriesRepository(SeriesRepository):
    """
    Series rows plus a series_books join table. Series never own books:
    deleting a series only removes its join rows.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def save(self, series: Series) -> Series:
        """Insert or update a series and replace its book links."""
        series_id = str(series.id)
        with self._db.transaction() as conn:
            conn.execute("""
                INSERT INTO series (id, title) VALUES (:id, :title)
                ON CONFLICT(id) DO UPDATE SET title=excluded.title
            """, {"id": series_id, "title": series.title})

            conn.execute("DELETE FROM series_books WHERE series_id = ?", (series_id,))
            conn.executemany(
                "INSERT INTO series_books (series_id, book_id) VALUES (?, ?)",
                [(series_id, str(book.id)) for book in series.books],
            )
        return series

    def get_by_id(self, series_id: UUID) -> Optional[Series]:
        with self._db.transaction() as conn:
            row = conn.execute(
                "SELECT * FROM series WHERE id = ?",
                (str(series_id),)
            ).fetchone()

            if row is None:
                return None

            return rows_to_series(conn, [row])[0]

    def get_all(self) -> List[Series]:
        with self._db.transaction() as conn:
            rows = conn.execute(f"SELECT * FROM series ORDER BY {SERIES_ORDER}").fetchall()
            return rows_to_series(conn, rows)

    def find_by_book(self, book: Book) -> List[Series]:
        with self._db.transaction() as conn:
            rows = conn.execute(f"""
                SELECT series.* FROM series
                JOIN series_books ON series_books.series_id = series.id
                WHERE series_books.book_id = ?
                ORDER BY {SERIES_ORDER}
            """, (str(book.id),)).fetchall()
            return rows_to_series(conn, rows)

    def count(self) -> int:
        with self._db.transaction() as conn:
            result = conn.execute("SELECT COUNT(*) AS cnt FROM series").fetchone()
            return result["cnt"]

    def delete(self, series: Series) -> None:
        self.delete_by_id(series.id)

    def delete_by_id(self, series_id: UUID) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM series WHERE id = ?",
                (str(series_id),)
            )
            return cursor.rowcount > 0
