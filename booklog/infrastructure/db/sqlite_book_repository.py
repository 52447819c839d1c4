"""
SQLite implementation of the BookRepository port.

Books live in the books table; their author set in the book_authors join
table. save() rewrites the join rows of the book, so the stored author set
always equals book.authors.
"""

import sqlite3
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from booklog.domain.entities import Author, Book
from booklog.domain.ports import BookRepository

from .database import SqliteDatabase
from .sqlite_author_repository import authors_by_ids

BOOK_ORDER = "title COLLATE NOCASE, id"


def rows_to_books(conn: sqlite3.Connection, rows: Sequence[sqlite3.Row]) -> List[Book]:
    """
    Convert rows of the books table to Book entities, keeping row order.

    Authors of all books are loaded with two queries, not one per book.
    """
    if not rows:
        return []

    book_ids = [row["id"] for row in rows]
    placeholders = ", ".join("?" * len(book_ids))
    links = conn.execute(
        f"SELECT book_id, author_id FROM book_authors WHERE book_id IN ({placeholders})",
        book_ids,
    ).fetchall()

    authors = authors_by_ids(conn, (link["author_id"] for link in links))
    authors_of: Dict[str, List[Author]] = defaultdict(list)
    for link in links:
        authors_of[link["book_id"]].append(authors[link["author_id"]])

    return [
        Book(
            id=UUID(row["id"]),
            title=row["title"],
            authors=authors_of[row["id"]],
            published=date.fromisoformat(row["published"]),
            isbn=row["isbn"],
            pages=row["pages"],
            language=row["language"],
        )
        for row in rows
    ]


def books_by_ids(conn: sqlite3.Connection, book_ids: Iterable[str]) -> Dict[str, Book]:
    """Load several books at once, keyed by their id string."""
    ids = list(set(book_ids))
    if not ids:
        return {}
    placeholders = ", ".join("?" * len(ids))
    rows = conn.execute(
        f"SELECT * FROM books WHERE id IN ({placeholders})", ids
    ).fetchall()
    return {str(book.id): book for book in rows_to_books(conn, rows)}


class SqliteBookRepository(BookRepository):
    """
    Saving a book whose authors are not stored violates the foreign key on
    book_authors and raises InvalidArgumentError.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def _book_to_row(self, book: Book) -> dict:
        """Convert a Book entity to a database row dict."""
        return {
            "id": str(book.id),
            "title": book.title,
            "published": book.published.isoformat(),
            "isbn": book.isbn,
            "pages": book.pages,
            "language": book.language,
        }

    def save(self, book: Book) -> Book:
        """Insert or update a book and replace its author links."""
        book_id = str(book.id)
        with self._db.transaction() as conn:
            conn.execute("""
                INSERT INTO books
                (id, title, published, isbn, pages, language)
                VALUES
                (:id, :title, :published, :isbn, :pages, :language)
                ON CONFLICT(id) DO UPDATE SET
                    title=excluded.title,
                    published=excluded.published,
                    isbn=excluded.isbn,
                    pages=excluded.pages,
                    language=excluded.language
            """, self._book_to_row(book))

            conn.execute("DELETE FROM book_authors WHERE book_id = ?", (book_id,))
            conn.executemany(
                "INSERT INTO book_authors (book_id, author_id) VALUES (?, ?)",
                [(book_id, str(author.id)) for author in book.authors],
            )
        return book

    def get_by_id(self, book_id: UUID) -> Optional[Book]:
        with self._db.transaction() as conn:
            row = conn.execute(
                "SELECT * FROM books WHERE id = ?",
                (str(book_id),)
            ).fetchone()

            if row is None:
                return None

            return rows_to_books(conn, [row])[0]

    def get_all(self) -> List[Book]:
        with self._db.transaction() as conn:
            rows = conn.execute(f"SELECT * FROM books ORDER BY {BOOK_ORDER}").fetchall()
            return rows_to_books(conn, rows)

    def find_by_author(self, author: Author) -> List[Book]:
        with self._db.transaction() as conn:
            rows = conn.execute(f"""
                SELECT books.* FROM books
                JOIN book_authors ON book_authors.book_id = books.id
                WHERE book_authors.author_id = ?
                ORDER BY {BOOK_ORDER}
            """, (str(author.id),)).fetchall()
            return rows_to_books(conn, rows)

    def count(self) -> int:
        with self._db.transaction() as conn:
            result = conn.execute("SELECT COUNT(*) AS cnt FROM books").fetchone()
            return result["cnt"]

    def delete(self, book: Book) -> None:
        self.delete_by_id(book.id)

    def delete_by_id(self, book_id: UUID) -> bool:
        """
        Delete a book row; author and series links are removed with it.

        Fails while readings still reference the book.
        """
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM books WHERE id = ?",
                (str(book_id),)
            )
            return cursor.rowcount > 0
