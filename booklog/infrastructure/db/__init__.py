"""
SQLite adapters for the repository and transaction ports.
"""

from .database import SqliteDatabase
from .sqlite_author_repository import SqliteAuthorRepository
from .sqlite_book_repository import SqliteBookRepository
from .sqlite_series_repository import SqliteSeriesRepository
from .sqlite_reading_repository import SqliteReadingRepository

__all__ = [
    "SqliteDatabase",
    "SqliteAuthorRepository",
    "SqliteBookRepository",
    "SqliteSeriesRepository",
    "SqliteReadingRepository",
]
