"""
Request and response models of the HTTP API.

Request models are the forms of the library: they check the shape of the
input (date strings, country and language codes, ISBN format, positive
numbers, non-empty id lists) before anything reaches the domain. Business
rules that need stored state or configuration (date ordering, the configured
language set, existing ids) are checked by the management services.
"""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from booklog.domain.validation import (
    DATE_REGEX,
    OPTIONAL_DATE_REGEX,
    require_country_code,
    require_isbn,
    require_language_code,
    require_text,
)


# -----------------------------------------------------------------------------
# Forms (request bodies)
# -----------------------------------------------------------------------------


class AuthorForm(BaseModel):
    """
    Request body for creating or editing an author.
    """
    first_name: str = Field(description="First name, must not be blank")
    last_name: str = Field(description="Last name, must not be blank")
    birth_date: str = Field(default="", pattern=OPTIONAL_DATE_REGEX, description="YYYY-MM-DD or empty")
    death_date: str = Field(default="", pattern=OPTIONAL_DATE_REGEX, description="YYYY-MM-DD or empty")
    country_code: str = Field(min_length=2, max_length=2, description="ISO 3166-1 alpha-2 code, e.g. 'US'")

    @field_validator("first_name", "last_name")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        return require_text(value, info.field_name)

    @field_validator("country_code")
    @classmethod
    def _country_code(cls, value: str) -> str:
        return require_country_code(value)


class BookForm(BaseModel):
    """
    Request body for creating or editing a book.

    series_ids replaces the series memberships of the book.
    """
    title: str = Field(description="Book title, must not be blank")
    author_ids: list[UUID] = Field(min_length=1, description="Ids of stored authors")
    published: str = Field(pattern=DATE_REGEX, description="Publication date, YYYY-MM-DD")
    isbn: str = Field(description="ISBN-10 or ISBN-13")
    pages: int = Field(gt=0, description="Number of pages")
    language: str = Field(min_length=2, max_length=2, description="ISO 639-1 code, see GET /languages")
    series_ids: list[UUID] = Field(default_factory=list, description="Ids of series containing the book")

    @field_validator("title")
    @classmethod
    def _title(cls, value: str) -> str:
        return require_text(value, "title")

    @field_validator("isbn")
    @classmethod
    def _isbn(cls, value: str) -> str:
        return require_isbn(value)

    @field_validator("language")
    @classmethod
    def _language(cls, value: str) -> str:
        return require_language_code(value)


class SeriesForm(BaseModel):
    """
    Request body for creating or editing a series.
    """
    title: str = Field(description="Series title, must not be blank")
    book_ids: list[UUID] = Field(default_factory=list, description="Ids of the books in the series")

    @field_validator("title")
    @classmethod
    def _title(cls, value: str) -> str:
        return require_text(value, "title")


class AddBooksForm(BaseModel):
    book_ids: list[UUID] = Field(min_length=1, description="Ids of the books to add")


class ReadingUpdateForm(BaseModel):
    """
    Request body for editing a reading. The book of a reading cannot change.
    """
    beginning: str = Field(pattern=DATE_REGEX, description="YYYY-MM-DD")
    end: str = Field(default="", pattern=OPTIONAL_DATE_REGEX, description="YYYY-MM-DD, empty while in progress")
    pages_per_hour: int = Field(gt=0, description="Reading pace")


class ReadingForm(ReadingUpdateForm):
    """
    Request body for creating a reading.
    """
    book_id: UUID = Field(description="Id of the book being read")


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class AuthorSummary(BaseModel):
    id: UUID
    full_name: str


class Author(BaseModel):
    """
    API representation of an Author entity.
    """
    id: UUID = Field(description="Unique identifier of the author")
    first_name: str
    last_name: str
    full_name: str
    birth_date: date | None = None
    death_date: date | None = None
    nationality: str = Field(description="ISO 3166-1 alpha-2 country code")
    alive: bool


class BookSummary(BaseModel):
    id: UUID
    title: str
    published: date


class Book(BaseModel):
    """
    API representation of a Book entity.
    """
    id: UUID = Field(description="Unique identifier of the book")
    title: str
    authors: list[AuthorSummary] = Field(description="Authors ordered by name")
    author_string: str
    published: date
    published_year: int
    isbn: str
    pages: int
    language: str = Field(description="ISO 639-1 language code")


class Series(BaseModel):
    """
    API representation of a Series entity.
    """
    id: UUID
    title: str
    books: list[BookSummary] = Field(description="Books ordered by publication date")
    authors: list[AuthorSummary] = Field(description="Authors, most contributing first")
    author_string: str | None = None


class Reading(BaseModel):
    """
    API representation of a Reading entity.
    """
    id: UUID
    book: BookSummary
    beginning: date
    end: date | None = None
    pages_per_hour: int
    state: Literal["in_progress", "finished"]
    estimated_hours: float = Field(description="Pages of the book divided by pages per hour")


class Language(BaseModel):
    code: str = Field(description="ISO 639-1 code")
    name: str
    default: bool = Field(description="Preselected language for new books")


class LibraryStats(BaseModel):
    authors: int = Field(ge=0)
    books: int = Field(ge=0)
    series: int = Field(ge=0)
    readings: int = Field(ge=0)
    readings_in_progress: int = Field(ge=0)
