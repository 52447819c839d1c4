"""
SQLite implementation of the AuthorRepository port.
"""

import sqlite3
from datetime import date
from typing import Iterable, Dict, List, Optional
from uuid import UUID

from booklog.domain.entities import Author
from booklog.domain.ports import AuthorRepository

from .database import SqliteDatabase

AUTHOR_ORDER = "last_name COLLATE NOCASE, first_name COLLATE NOCASE, id"


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def row_to_author(row: sqlite3.Row) -> Author:
    """Convert a row of the authors table to an Author entity."""
    return Author(
        id=UUID(row["id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        nationality=row["nationality"],
        birth_date=_parse_date(row["birth_date"]),
        death_date=_parse_date(row["death_date"]),
    )


def authors_by_ids(conn: sqlite3.Connection, author_ids: Iterable[str]) -> Dict[str, Author]:
    """Load several authors at once, keyed by their id string."""
    ids = list(set(author_ids))
    if not ids:
        return {}
    placeholders = ", ".join("?" * len(ids))
    rows = conn.execute(
        f"SELECT * FROM authors WHERE id IN ({placeholders})", ids
    ).fetchall()
    return {row["id"]: row_to_author(row) for row in rows}


class SqliteAuthorRepository(AuthorRepository):
    """
    Authors are stored one row each; dates as ISO-8601 text.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def _author_to_row(self, author: Author) -> dict:
        """Convert an Author entity to a database row dict."""
        return {
            "id": str(author.id),
            "first_name": author.first_name,
            "last_name": author.last_name,
            "birth_date": author.birth_date.isoformat() if author.birth_date else None,
            "death_date": author.death_date.isoformat() if author.death_date else None,
            "nationality": author.nationality,
        }

    def save(self, author: Author) -> Author:
        """Insert or update an author."""
        with self._db.transaction() as conn:
            conn.execute("""
                INSERT INTO authors
                (id, first_name, last_name, birth_date, death_date, nationality)
                VALUES
                (:id, :first_name, :last_name, :birth_date, :death_date, :nationality)
                ON CONFLICT(id) DO UPDATE SET
                    first_name=excluded.first_name,
                    last_name=excluded.last_name,
                    birth_date=excluded.birth_date,
                    death_date=excluded.death_date,
                    nationality=excluded.nationality
            """, self._author_to_row(author))
        return author

    def get_by_id(self, author_id: UUID) -> Optional[Author]:
        with self._db.transaction() as conn:
            row = conn.execute(
                "SELECT * FROM authors WHERE id = ?",
                (str(author_id),)
            ).fetchone()

            if row is None:
                return None

            return row_to_author(row)

    def get_all(self) -> List[Author]:
        with self._db.transaction() as conn:
            rows = conn.execute(f"SELECT * FROM authors ORDER BY {AUTHOR_ORDER}").fetchall()
            return [row_to_author(row) for row in rows]

    def count(self) -> int:
        with self._db.transaction() as conn:
            result = conn.execute("SELECT COUNT(*) AS cnt FROM authors").fetchone()
            return result["cnt"]

    def delete(self, author: Author) -> None:
        self.delete_by_id(author.id)

    def delete_by_id(self, author_id: UUID) -> bool:
        """Delete an author row. Fails if books still link to the author."""
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM authors WHERE id = ?",
                (str(author_id),)
            )
            return cursor.rowcount > 0
