"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.

Following Hexagonal Architecture principles, the management services depend
only on these protocols, never on the SQLite adapters.
"""

from contextlib import AbstractContextManager
from typing import Any, List, Optional, Protocol
from uuid import UUID

from .entities import Author, Book, Reading, Series


class TransactionManager(Protocol):
    """
    Port for the atomic boundary of one management-service operation.

    Everything persisted inside a transaction() block commits together or
    not at all. Blocks may nest; only the outermost block commits or rolls
    back, so a cascading delete that calls into another service still runs
    as a single unit.
    """

    def transaction(self) -> AbstractContextManager[Any]:
        """
        Open (or join) a transaction.

        Leaving the block normally commits the outermost transaction;
        leaving it with an exception rolls everything back and re-raises.
        """
        ...


class AuthorRepository(Protocol):
    """
    Port for persisting and retrieving authors.
    """

    def save(self, author: Author) -> Author:
        """
        Insert or update an author.

        Returns:
            The stored author

        Raises:
            InvalidArgumentError: If the row violates storage constraints
            RuntimeError: If a database error occurs
        """
        ...

    def get_by_id(self, author_id: UUID) -> Optional[Author]:
        """Return the author, or None if the id is unknown."""
        ...

    def get_all(self) -> List[Author]:
        """Return all authors ordered by last name, then first name."""
        ...

    def count(self) -> int:
        ...

    def delete(self, author: Author) -> None:
        """Delete the author. Deleting an unknown author is a no-op."""
        ...

    def delete_by_id(self, author_id: UUID) -> bool:
        """Delete by id. Returns True if a row was deleted."""
        ...


class BookRepository(Protocol):
    """
    Port for persisting and retrieving books together with their authors.

    The book <-> author membership is stored with the book: save() replaces
    the stored author set with book.authors.
    """

    def save(self, book: Book) -> Book:
        """
        Insert or update a book and its author links.

        Raises:
            InvalidArgumentError: If an author is not stored or a constraint fails
            RuntimeError: If a database error occurs
        """
        ...

    def get_by_id(self, book_id: UUID) -> Optional[Book]:
        ...

    def get_all(self) -> List[Book]:
        """Return all books ordered by title."""
        ...

    def find_by_author(self, author: Author) -> List[Book]:
        """Return every book whose author set contains the given author."""
        ...

    def count(self) -> int:
        ...

    def delete(self, book: Book) -> None:
        ...

    def delete_by_id(self, book_id: UUID) -> bool:
        ...


class SeriesRepository(Protocol):
    """
    Port for persisting and retrieving series together with their book links.
    """

    def save(self, series: Series) -> Series:
        """Insert or update a series and replace its stored book set."""
        ...

    def get_by_id(self, series_id: UUID) -> Optional[Series]:
        ...

    def get_all(self) -> List[Series]:
        """Return all series ordered by title."""
        ...

    def find_by_book(self, book: Book) -> List[Series]:
        """Return every series whose book set contains the given book."""
        ...

    def count(self) -> int:
        ...

    def delete(self, series: Series) -> None:
        ...

    def delete_by_id(self, series_id: UUID) -> bool:
        ...


class ReadingRepository(Protocol):
    """
    Port for persisting and retrieving readings.
    """

    def save(self, reading: Reading) -> Reading:
        ...

    def get_by_id(self, reading_id: UUID) -> Optional[Reading]:
        ...

    def get_all(self) -> List[Reading]:
        """Return all readings, most recent beginning first."""
        ...

    def find_by_book(self, book: Book) -> List[Reading]:
        """Return the readings of a book, most recent beginning first."""
        ...

    def find_in_progress(self) -> List[Reading]:
        """Return the readings without an end date, most recent beginning first."""
        ...

    def count(self) -> int:
        ...

    def delete(self, reading: Reading) -> None:
        ...

    def delete_by_id(self, reading_id: UUID) -> bool:
        ...
