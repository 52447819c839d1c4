"""
Shared fixtures for the booklog tests.

Service and repository tests run against a real SQLite database in a
temporary directory. No mocking of SQL - we test actual behavior.
"""

from datetime import date

import pytest

from booklog.domain.services import AuthorManagement, BookManagement, ReadingManagement
from booklog.domain.value_objects import LanguageConfig
from booklog.infrastructure.db import (
    SqliteAuthorRepository,
    SqliteBookRepository,
    SqliteDatabase,
    SqliteReadingRepository,
    SqliteSeriesRepository,
)


@pytest.fixture
def database(tmp_path):
    """A fresh database file per test."""
    db = SqliteDatabase(tmp_path / "library.db")
    yield db
    db.close()


@pytest.fixture
def readings(database) -> ReadingManagement:
    return ReadingManagement(
        reading_repo=SqliteReadingRepository(database),
        transactions=database,
    )


@pytest.fixture
def books(database, readings) -> BookManagement:
    return BookManagement(
        book_repo=SqliteBookRepository(database),
        series_repo=SqliteSeriesRepository(database),
        reading_management=readings,
        transactions=database,
        languages=LanguageConfig(("de", "en")),
    )


@pytest.fixture
def authors(database, books) -> AuthorManagement:
    return AuthorManagement(
        author_repo=SqliteAuthorRepository(database),
        book_management=books,
        transactions=database,
    )


@pytest.fixture
def robert(authors):
    return authors.create_author("Robert", "Jordan", "US", date(1948, 10, 17), date(2007, 9, 16))


@pytest.fixture
def brandon(authors):
    return authors.create_author("Brandon", "Sanderson", "US", date(1975, 12, 19))


@pytest.fixture
def eye_of_the_world(books, robert):
    return books.create_book(
        "The Eye of the World", [robert], date(1990, 1, 15), "978-0-312-85009-8", 685, "en"
    )
