"""
Domain entities for the library.

Entities are objects with a unique identity that runs through time and
different representations. Each entity validates its fields when it is
constructed and again on every setter call, so an instance never holds
invalid state: a rejected assignment raises and leaves the entity as it was.
"""

from collections import Counter
from datetime import date
from typing import Iterable, List, Optional, FrozenSet
from uuid import UUID

from .errors import InvalidArgumentError
from .utils.uuid7 import uuid7
from .validation import (
    not_in_future,
    optional_date,
    ordered_dates,
    require,
    require_country_code,
    require_date,
    require_isbn,
    require_language_code,
    require_positive,
    require_text,
)
from .value_objects import ReadingState


class Author:
    """
    A person writing books.

    Names are trimmed and must not be blank. Birth and death dates are
    optional, may not lie in the future, and a death date never precedes
    the birth date.
    """

    def __init__(
        self,
        id: UUID,
        first_name: str,
        last_name: str,
        nationality: str,
        birth_date: Optional[date] = None,
        death_date: Optional[date] = None,
    ) -> None:
        self.id: UUID = require(id, "id")
        self.first_name = first_name
        self.last_name = last_name
        self.nationality = nationality
        self._birth_date: Optional[date] = None
        self._death_date: Optional[date] = None
        self.set_life_dates(birth_date, death_date)

    @staticmethod
    def create_new(
        first_name: str,
        last_name: str,
        nationality: str,
        birth_date: Optional[date] = None,
        death_date: Optional[date] = None,
    ) -> "Author":
        """Factory method to create a new author with an auto-generated ID."""
        return Author(
            id=uuid7(),
            first_name=first_name,
            last_name=last_name,
            nationality=nationality,
            birth_date=birth_date,
            death_date=death_date,
        )

    @property
    def first_name(self) -> str:
        return self._first_name

    @first_name.setter
    def first_name(self, value: str) -> None:
        self._first_name = require_text(value, "first_name")

    @property
    def last_name(self) -> str:
        return self._last_name

    @last_name.setter
    def last_name(self, value: str) -> None:
        self._last_name = require_text(value, "last_name")

    @property
    def nationality(self) -> str:
        """ISO 3166-1 alpha-2 country code, upper case."""
        return self._nationality

    @nationality.setter
    def nationality(self, value: str) -> None:
        self._nationality = require_country_code(value)

    @property
    def birth_date(self) -> Optional[date]:
        return self._birth_date

    @birth_date.setter
    def birth_date(self, value: Optional[date]) -> None:
        self.set_life_dates(value, self._death_date)

    @property
    def death_date(self) -> Optional[date]:
        return self._death_date

    @death_date.setter
    def death_date(self, value: Optional[date]) -> None:
        self.set_life_dates(self._birth_date, value)

    def set_life_dates(self, birth_date: Optional[date], death_date: Optional[date]) -> None:
        """
        Replace both dates at once.

        Validating the pair together allows moving both dates past each
        other (e.g. correcting a wrong century) in a single step.
        """
        birth_date = not_in_future(optional_date(birth_date, "birth_date"), "birth_date")
        death_date = not_in_future(optional_date(death_date, "death_date"), "death_date")
        ordered_dates(birth_date, death_date, "birth_date", "death_date")

        self._birth_date = birth_date
        self._death_date = death_date

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_alive(self) -> bool:
        """An author without a death date is considered alive."""
        return self._death_date is None

    def sort_key(self) -> tuple:
        return (self.last_name.lower(), self.first_name.lower(), str(self.id))

    def __eq__(self, other: object) -> bool:
        """Two authors are equal if they have the same ID."""
        if not isinstance(other, Author):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name={self.full_name!r}, nationality={self.nationality!r})"


class Book:
    """
    A book in the catalog.

    A book always has at least one author. The author set is shared with
    Author (many-to-many); removing the last author is rejected here, while
    deleting an author is handled by the management layer, which deletes
    the books that would otherwise be left without one.
    """

    def __init__(
        self,
        id: UUID,
        title: str,
        authors: Iterable[Author],
        published: date,
        isbn: str,
        pages: int,
        language: str,
    ) -> None:
        self.id: UUID = require(id, "id")
        self.title = title
        self.set_authors(authors)
        self.published = published
        self.isbn = isbn
        self.pages = pages
        self.language = language

    @staticmethod
    def create_new(
        title: str,
        authors: Iterable[Author],
        published: date,
        isbn: str,
        pages: int,
        language: str,
    ) -> "Book":
        """Factory method to create a new book with an auto-generated ID."""
        return Book(
            id=uuid7(),
            title=title,
            authors=authors,
            published=published,
            isbn=isbn,
            pages=pages,
            language=language,
        )

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = require_text(value, "title")

    @property
    def authors(self) -> FrozenSet[Author]:
        return frozenset(self._authors)

    @authors.setter
    def authors(self, value: Iterable[Author]) -> None:
        self.set_authors(value)

    def set_authors(self, authors: Iterable[Author]) -> None:
        """
        Replace the author set.

        Raises:
            MissingValueError: If authors is None
            InvalidArgumentError: If authors is empty or contains non-authors
        """
        require(authors, "authors")
        if isinstance(authors, Author):
            authors = [authors]

        new_authors = set()
        for author in authors:
            if not isinstance(author, Author):
                raise InvalidArgumentError(
                    f"authors must only contain Author instances, got {type(author).__name__}"
                )
            new_authors.add(author)

        if not new_authors:
            raise InvalidArgumentError("Book must have at least one author")

        self._authors = new_authors

    def add_author(self, author: Author) -> bool:
        """Add an author. Returns False if it was already present."""
        if not isinstance(require(author, "author"), Author):
            raise InvalidArgumentError(f"author must be an Author, got {type(author).__name__}")
        if author in self._authors:
            return False
        self._authors.add(author)
        return True

    def remove_author(self, author: Author) -> bool:
        """
        Remove an author. Returns False if it was not an author of this book.

        Raises:
            InvalidArgumentError: If author is the only author of this book
        """
        if author not in self._authors:
            return False
        if len(self._authors) == 1:
            raise InvalidArgumentError(
                f"Cannot remove {author}: a book must keep at least one author"
            )
        self._authors.remove(author)
        return True

    def has_sole_author(self, author: Author) -> bool:
        return self._authors == {author}

    @property
    def author_string(self) -> str:
        """Names of all authors, comma separated, ordered by name."""
        return ", ".join(a.full_name for a in sorted(self._authors, key=Author.sort_key))

    @property
    def published(self) -> date:
        return self._published

    @published.setter
    def published(self, value: date) -> None:
        self._published = require_date(value, "published")

    @property
    def published_year(self) -> int:
        return self._published.year

    @property
    def isbn(self) -> str:
        return self._isbn

    @isbn.setter
    def isbn(self, value: str) -> None:
        self._isbn = require_isbn(value)

    @property
    def pages(self) -> int:
        return self._pages

    @pages.setter
    def pages(self, value: int) -> None:
        self._pages = require_positive(value, "pages")

    @property
    def language(self) -> str:
        """ISO 639-1 code. Membership in the configured set is checked by BookManagement."""
        return self._language

    @language.setter
    def language(self, value: str) -> None:
        self._language = require_language_code(value)

    def sort_key(self) -> tuple:
        return (self.title.lower(), str(self.id))

    def __eq__(self, other: object) -> bool:
        """Two books are equal if they have the same ID."""
        if not isinstance(other, Book):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.author_string}: {self.title}"

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title={self.title!r}, isbn={self.isbn!r})"


def _publication_order(book: Book) -> tuple:
    return (book.published, book.title.lower(), str(book.id))


class Series:
    """
    A named collection of books.

    A series only references its books: adding or removing a book never
    affects the book or its authors, and an empty series is valid.
    """

    def __init__(self, id: UUID, title: str, books: Optional[Iterable[Book]] = None) -> None:
        self.id: UUID = require(id, "id")
        self.title = title
        self._books: set = set()
        self.add_all(books)

    @staticmethod
    def create_new(title: str, books: Optional[Iterable[Book]] = None) -> "Series":
        """Factory method to create a new series with an auto-generated ID."""
        return Series(id=uuid7(), title=title, books=books)

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = require_text(value, "title")

    @property
    def books(self) -> List[Book]:
        """Books ordered by publication date (ascending)."""
        return sorted(self._books, key=_publication_order)

    def __contains__(self, book: object) -> bool:
        return book in self._books

    def __len__(self) -> int:
        return len(self._books)

    def add(self, book: Book) -> bool:
        """Add a book. Returns False if it was already part of the series."""
        if not isinstance(require(book, "book"), Book):
            raise InvalidArgumentError(f"book must be a Book, got {type(book).__name__}")
        if book in self._books:
            return False
        self._books.add(book)
        return True

    def add_all(self, books: Optional[Iterable[Book]]) -> bool:
        """
        Add several books. None is accepted and adds nothing.

        Returns True if the series changed.
        """
        if books is None:
            return False
        if isinstance(books, Book):
            books = [books]

        books = list(books)
        for book in books:
            if not isinstance(book, Book):
                raise InvalidArgumentError(f"books must only contain Book instances, got {type(book).__name__}")

        changed = False
        for book in books:
            changed = self.add(book) or changed
        return changed

    def remove(self, book: Optional[Book]) -> bool:
        """Remove a book. Returns False if it was not part of the series."""
        if book is None or book not in self._books:
            return False
        self._books.remove(book)
        return True

    def clear(self) -> None:
        self._books.clear()

    @property
    def authors(self) -> List[Author]:
        """
        Authors of the books in this series, most contributing author first.

        Computed from the current book set on every call. Authors with the
        same number of books are ordered by name.
        """
        contributions: Counter = Counter()
        for book in self._books:
            contributions.update(book.authors)

        return sorted(
            contributions,
            key=lambda author: (-contributions[author], *author.sort_key()),
        )

    @property
    def author_string(self) -> Optional[str]:
        if not self._books:
            return None
        return ", ".join(author.full_name for author in self.authors)

    def __eq__(self, other: object) -> bool:
        """Two series are equal if they have the same ID."""
        if not isinstance(other, Series):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Series(id={self.id}, title={self.title!r}, books={len(self._books)})"


class Reading:
    """
    One reading session of a book.

    A reading without an end date is in progress. Setting an end date
    finishes it; clearing the end date again is allowed and reopens it.
    The book of a reading is fixed at creation.
    """

    def __init__(
        self,
        id: UUID,
        book: Book,
        beginning: date,
        end: Optional[date],
        pages_per_hour: int,
    ) -> None:
        self.id: UUID = require(id, "id")
        if not isinstance(require(book, "book"), Book):
            raise InvalidArgumentError(f"book must be a Book, got {type(book).__name__}")
        self._book = book
        self._beginning: Optional[date] = None
        self._end: Optional[date] = None
        self.set_period(beginning, end)
        self.pages_per_hour = pages_per_hour

    @staticmethod
    def create_new(
        book: Book,
        beginning: date,
        end: Optional[date] = None,
        *,
        pages_per_hour: int,
    ) -> "Reading":
        """Factory method to create a new reading with an auto-generated ID."""
        return Reading(
            id=uuid7(),
            book=book,
            beginning=beginning,
            end=end,
            pages_per_hour=pages_per_hour,
        )

    @property
    def book(self) -> Book:
        return self._book

    @property
    def beginning(self) -> date:
        return self._beginning

    @beginning.setter
    def beginning(self, value: date) -> None:
        self.set_period(value, self._end)

    @property
    def end(self) -> Optional[date]:
        return self._end

    @end.setter
    def end(self, value: Optional[date]) -> None:
        self.set_period(self._beginning, value)

    def set_period(self, beginning: date, end: Optional[date]) -> None:
        """Replace beginning and end together; end must not precede beginning."""
        beginning = require_date(beginning, "beginning")
        end = optional_date(end, "end")
        ordered_dates(beginning, end, "beginning", "end")

        self._beginning = beginning
        self._end = end

    @property
    def pages_per_hour(self) -> int:
        return self._pages_per_hour

    @pages_per_hour.setter
    def pages_per_hour(self, value: int) -> None:
        self._pages_per_hour = require_positive(value, "pages_per_hour")

    @property
    def state(self) -> ReadingState:
        return ReadingState.FINISHED if self._end is not None else ReadingState.IN_PROGRESS

    def is_finished(self) -> bool:
        return self._end is not None

    def finish(self, end: date) -> None:
        """Mark the reading as finished on the given date."""
        self.end = require_date(end, "end")

    def reopen(self) -> None:
        """Clear the end date, moving the reading back to in progress."""
        self._end = None

    @property
    def estimated_hours(self) -> float:
        """Estimated total reading time of the book at this reading's pace."""
        return self._book.pages / self._pages_per_hour

    def __eq__(self, other: object) -> bool:
        """Two readings are equal if they have the same ID."""
        if not isinstance(other, Reading):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"Reading(id={self.id}, book={self._book.title!r}, "
            f"beginning={self._beginning}, end={self._end})"
        )
