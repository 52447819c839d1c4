"""
Library-wide endpoints: configured languages, counts and health.
"""

from fastapi import APIRouter, Depends

from booklog.domain.services import AuthorManagement, BookManagement, ReadingManagement
from booklog.domain.value_objects import LanguageConfig
from booklog.api.v1 import schemas as api
from booklog.api.v1.converters import language_config_to_api
from booklog.api.v1.dependencies import (
    get_author_management,
    get_book_management,
    get_languages,
    get_reading_management,
)

router = APIRouter()


@router.get("/languages", response_model=list[api.Language])
def list_languages(
    languages: LanguageConfig = Depends(get_languages),
) -> list[api.Language]:
    """The languages a book may be written in, default first."""
    return language_config_to_api(languages)


@router.get("/stats", response_model=api.LibraryStats)
def library_stats(
    authors: AuthorManagement = Depends(get_author_management),
    books: BookManagement = Depends(get_book_management),
    readings: ReadingManagement = Depends(get_reading_management),
) -> api.LibraryStats:
    return api.LibraryStats(
        authors=authors.get_author_count(),
        books=books.get_book_count(),
        series=books.get_series_count(),
        readings=readings.get_reading_count(),
        readings_in_progress=len(readings.find_readings_in_progress()),
    )


@router.get("/health")
def health_check(
    books: BookManagement = Depends(get_book_management),
) -> dict:
    """
    Check that the database answers queries.
    """
    try:
        books.get_book_count()
    except RuntimeError:
        return {"status": "degraded", "database": False}
    return {"status": "ok", "database": True}
