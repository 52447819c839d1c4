"""
Domain service managing books and series.

=============================================================================
Cascading delete of a book
=============================================================================

A series only references its books, and a reading points at exactly one
book. Deleting a book therefore runs, inside one transaction:

    1. remove the book from every series that contains it (series survive)
    2. delete every reading of the book (via ReadingManagement)
    3. delete the book row (its author links go with it)

If any step fails the whole delete rolls back.
=============================================================================
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Union
from uuid import UUID

from booklog.domain.entities import Author, Book, Series
from booklog.domain.errors import NotFoundError
from booklog.domain.ports import BookRepository, SeriesRepository, TransactionManager
from booklog.domain.value_objects import LanguageConfig

from .reading_management import ReadingManagement

logger = logging.getLogger(__name__)


class BookManagement:
    """
    Creates, updates, deletes and looks up Book and Series entities.

    The set of languages a book may be written in is injected as a
    LanguageConfig; values outside of it are rejected on create and update.
    Authors are never created here: callers resolve them first
    (see AuthorManagement.find_authors_by_ids).
    """

    def __init__(
        self,
        book_repo: BookRepository,
        series_repo: SeriesRepository,
        reading_management: ReadingManagement,
        transactions: TransactionManager,
        languages: Optional[LanguageConfig] = None,
    ) -> None:
        """
        Args:
            book_repo: Repository for books and their author links
            series_repo: Repository for series and their book links
            reading_management: Used to delete the readings of deleted books
            transactions: Atomic boundary for every mutating operation
            languages: Allowed book languages (German and English by default)
        """
        self._book_repo = book_repo
        self._series_repo = series_repo
        self._reading_management = reading_management
        self._transactions = transactions
        self._languages = languages or LanguageConfig()

    @property
    def languages(self) -> LanguageConfig:
        return self._languages

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------

    def create_book(
        self,
        title: str,
        authors: Iterable[Author],
        published: date,
        isbn: str,
        pages: int,
        language: str,
        series_ids: Optional[Iterable[UUID]] = None,
    ) -> Book:
        """
        Create and persist a new book.

        Args:
            title: Must not be blank
            authors: Stored Author entities, at least one
            published: Publication date
            isbn: ISBN-10 or ISBN-13
            pages: Positive page count
            language: One of the configured language codes
            series_ids: If given, the series the new book belongs to

        Returns:
            The stored book

        Raises:
            MissingValueError: If a required value is None
            InvalidArgumentError: If a value breaks a validation rule
            NotFoundError: If one of series_ids is unknown
        """
        language = self._languages.require(language)
        book = Book.create_new(title, authors, published, isbn, pages, language)

        with self._transactions.transaction():
            book = self._book_repo.save(book)
            if series_ids is not None:
                self.set_series_of_book(book, series_ids)
            return book

    def update_book(
        self,
        book_id: UUID,
        title: str,
        authors: Iterable[Author],
        published: date,
        isbn: str,
        pages: int,
        language: str,
        series_ids: Optional[Iterable[UUID]] = None,
    ) -> Book:
        """
        Update every field of a stored book.

        The loaded book is mutated field by field; it is only saved once all
        setters succeeded, so a rejected value never reaches storage.

        Raises:
            NotFoundError: If book_id (or one of series_ids) is unknown
        """
        with self._transactions.transaction():
            book = self.find_book_by_id(book_id)
            book.title = title
            book.set_authors(authors)
            book.published = published
            book.isbn = isbn
            book.pages = pages
            book.language = self._languages.require(language)

            book = self._book_repo.save(book)
            if series_ids is not None:
                self.set_series_of_book(book, series_ids)
            return book

    def remove_author_from_book(self, book: Book, author: Author) -> Book:
        """
        Drop one author from a co-authored book and persist it.

        Raises:
            InvalidArgumentError: If author is the only author of the book
        """
        with self._transactions.transaction():
            book.remove_author(author)
            return self._book_repo.save(book)

    def delete_book(self, book: Union[Book, UUID]) -> None:
        """
        Delete a book, detaching it from its series and deleting its readings.

        Raises:
            NotFoundError: If the book is not stored
        """
        book_id = book.id if isinstance(book, Book) else book

        with self._transactions.transaction():
            book = self.find_book_by_id(book_id)

            series_count = self.remove_book_from_all_series(book)
            reading_count = self._reading_management.delete_readings_by_book(book)
            self._book_repo.delete(book)

        logger.debug(
            "Deleted book %s (removed from %d series, %d readings deleted)",
            book_id, series_count, reading_count,
        )

    def find_all_books(self) -> List[Book]:
        """All books ordered by title."""
        return self._book_repo.get_all()

    def find_book_by_id(self, book_id: UUID) -> Book:
        """
        Raises:
            NotFoundError: If book_id is unknown
        """
        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    def find_books_by_ids(self, book_ids: Iterable[UUID]) -> List[Book]:
        """
        Resolve a list of ids (e.g. from a form) to books, keeping the order.

        Raises:
            NotFoundError: On the first unknown id
        """
        return [self.find_book_by_id(book_id) for book_id in dict.fromkeys(book_ids)]

    def find_books_by_author(self, author: Author) -> List[Book]:
        return self._book_repo.find_by_author(author)

    def get_book_count(self) -> int:
        return self._book_repo.count()

    # -------------------------------------------------------------------------
    # Series
    # -------------------------------------------------------------------------

    def create_series(self, title: str, books: Optional[Iterable[Book]] = None) -> Series:
        """
        Create and persist a new series, optionally with an initial book set.

        Raises:
            MissingValueError: If title is None
            InvalidArgumentError: If title is blank
        """
        series = Series.create_new(title, books)
        with self._transactions.transaction():
            return self._series_repo.save(series)

    def update_series(
        self,
        series_id: UUID,
        title: str,
        books: Optional[Iterable[Book]] = None,
    ) -> Series:
        """
        Rename a series and replace its book set (None empties it).

        Raises:
            NotFoundError: If series_id is unknown
        """
        with self._transactions.transaction():
            series = self.find_series_by_id(series_id)
            series.title = title
            series.clear()
            series.add_all(books)
            return self._series_repo.save(series)

    def delete_series(self, series_id: UUID) -> None:
        """
        Delete a series. Its books are not touched.

        Raises:
            NotFoundError: If series_id is unknown
        """
        with self._transactions.transaction():
            if not self._series_repo.delete_by_id(series_id):
                raise NotFoundError("Series", series_id)

    def add_books_to_series(self, books: Union[Book, Iterable[Book]], series_id: UUID) -> Series:
        """
        Add one or more books to a series.

        Books already in the series are ignored; if nothing changes the
        series is returned without being saved again.

        Raises:
            NotFoundError: If series_id is unknown
        """
        with self._transactions.transaction():
            series = self.find_series_by_id(series_id)
            if series.add_all(books):
                series = self._series_repo.save(series)
            return series

    def remove_book_from_all_series(self, book: Book) -> int:
        """Remove a book from every series containing it. Returns the number of series changed."""
        with self._transactions.transaction():
            changed = 0
            for series in self._series_repo.find_by_book(book):
                if series.remove(book):
                    self._series_repo.save(series)
                    changed += 1
            return changed

    def set_series_of_book(self, book: Book, series_ids: Iterable[UUID]) -> List[Series]:
        """
        Make the given series the only ones containing the book.

        Returns:
            The series the book now belongs to

        Raises:
            NotFoundError: If one of series_ids is unknown (nothing is changed)
        """
        with self._transactions.transaction():
            targets = [self.find_series_by_id(series_id) for series_id in dict.fromkeys(series_ids)]

            self.remove_book_from_all_series(book)
            return [self.add_books_to_series(book, series.id) for series in targets]

    def find_all_series(self) -> List[Series]:
        """All series ordered by title."""
        return self._series_repo.get_all()

    def find_series_by_id(self, series_id: UUID) -> Series:
        """
        Raises:
            NotFoundError: If series_id is unknown
        """
        series = self._series_repo.get_by_id(series_id)
        if series is None:
            raise NotFoundError("Series", series_id)
        return series

    def find_series_by_book(self, book: Book) -> List[Series]:
        return self._series_repo.find_by_book(book)

    def get_series_count(self) -> int:
        return self._series_repo.count()
