"""
FastAPI dependencies for dependency injection.

All management services share one SqliteDatabase, which is also their
TransactionManager; that shared connection is what lets a cascading delete
run as one transaction. The objects are module-level singletons built on
first use, and reset_dependencies() drops them (tests point DB_PATH at a
temporary file first).
"""

import os
from pathlib import Path
from typing import Optional

from booklog.domain.services import AuthorManagement, BookManagement, ReadingManagement
from booklog.domain.value_objects import LanguageConfig
from booklog.infrastructure.db import (
    SqliteAuthorRepository,
    SqliteBookRepository,
    SqliteDatabase,
    SqliteReadingRepository,
    SqliteSeriesRepository,
)

# Configuration from environment
DB_PATH = Path(os.getenv("BOOKLOG_DB_PATH", "data/library.db"))
LANGUAGES = os.getenv("BOOKLOG_LANGUAGES", "de,en")

# Module-level singletons (initialized lazily)
_database: Optional[SqliteDatabase] = None
_languages: Optional[LanguageConfig] = None
_reading_management: Optional[ReadingManagement] = None
_book_management: Optional[BookManagement] = None
_author_management: Optional[AuthorManagement] = None


def get_database() -> SqliteDatabase:
    """Provide a singleton instance of the SQLite database."""
    global _database
    if _database is None:
        _database = SqliteDatabase(DB_PATH)
    return _database


def get_languages() -> LanguageConfig:
    """Provide the configured language set."""
    global _languages
    if _languages is None:
        _languages = LanguageConfig.from_string(LANGUAGES)
    return _languages


def get_reading_management() -> ReadingManagement:
    """Provide a singleton instance of the reading service."""
    global _reading_management
    if _reading_management is None:
        database = get_database()
        _reading_management = ReadingManagement(
            reading_repo=SqliteReadingRepository(database),
            transactions=database,
        )
    return _reading_management


def get_book_management() -> BookManagement:
    """Provide the book service with all dependencies wired."""
    global _book_management
    if _book_management is None:
        database = get_database()
        _book_management = BookManagement(
            book_repo=SqliteBookRepository(database),
            series_repo=SqliteSeriesRepository(database),
            reading_management=get_reading_management(),
            transactions=database,
            languages=get_languages(),
        )
    return _book_management


def get_author_management() -> AuthorManagement:
    """Provide the author service with all dependencies wired."""
    global _author_management
    if _author_management is None:
        database = get_database()
        _author_management = AuthorManagement(
            author_repo=SqliteAuthorRepository(database),
            book_management=get_book_management(),
            transactions=database,
        )
    return _author_management


def reset_dependencies() -> None:
    """
    Reset all singletons. Useful for testing.

    This allows tests to point DB_PATH / LANGUAGES elsewhere or inject
    their own instances between test cases.
    """
    global _database, _languages, _reading_management
    global _book_management, _author_management

    if _database is not None:
        _database.close()

    _database = None
    _languages = None
    _reading_management = None
    _book_management = None
    _author_management = None
