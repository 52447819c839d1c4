"""
Converters between domain entities and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer, including turning form date strings into dates.
"""

from datetime import date
from typing import Optional

from booklog.domain import entities as domain
from booklog.domain.validation import parse_date
from booklog.domain.value_objects import LanguageConfig
from booklog.api.v1 import schemas as api


def form_date(value: str, name: str) -> date:
    """Parse a required YYYY-MM-DD form value."""
    return parse_date(value, name)


def form_optional_date(value: Optional[str], name: str) -> Optional[date]:
    """Parse an optional YYYY-MM-DD form value; empty means None."""
    return parse_date(value, name, optional=True)


def domain_author_to_summary(author: domain.Author) -> api.AuthorSummary:
    return api.AuthorSummary(id=author.id, full_name=author.full_name)


def domain_author_to_api(author: domain.Author) -> api.Author:
    """
    Convert a domain Author entity to an API Author model.
    """
    return api.Author(
        id=author.id,
        first_name=author.first_name,
        last_name=author.last_name,
        full_name=author.full_name,
        birth_date=author.birth_date,
        death_date=author.death_date,
        nationality=author.nationality,
        alive=author.is_alive(),
    )


def domain_book_to_summary(book: domain.Book) -> api.BookSummary:
    return api.BookSummary(id=book.id, title=book.title, published=book.published)


def domain_book_to_api(book: domain.Book) -> api.Book:
    """
    Convert a domain Book entity to an API Book model.

    Authors are listed in the same order as in author_string.
    """
    authors = sorted(book.authors, key=domain.Author.sort_key)
    return api.Book(
        id=book.id,
        title=book.title,
        authors=[domain_author_to_summary(a) for a in authors],
        author_string=book.author_string,
        published=book.published,
        published_year=book.published_year,
        isbn=book.isbn,
        pages=book.pages,
        language=book.language,
    )


def domain_series_to_api(series: domain.Series) -> api.Series:
    """
    Convert a domain Series entity to an API Series model.
    """
    return api.Series(
        id=series.id,
        title=series.title,
        books=[domain_book_to_summary(b) for b in series.books],
        authors=[domain_author_to_summary(a) for a in series.authors],
        author_string=series.author_string,
    )


def domain_reading_to_api(reading: domain.Reading) -> api.Reading:
    """
    Convert a domain Reading entity to an API Reading model.
    """
    return api.Reading(
        id=reading.id,
        book=domain_book_to_summary(reading.book),
        beginning=reading.beginning,
        end=reading.end,
        pages_per_hour=reading.pages_per_hour,
        state=reading.state.value,
        estimated_hours=round(reading.estimated_hours, 2),
    )


def language_config_to_api(languages: LanguageConfig) -> list[api.Language]:
    return [
        api.Language(code=code, name=name, default=code == languages.default)
        for code, name in languages.choices().items()
    ]
