"""
API endpoints for books.

Author and series ids of the book form are resolved here before calling
BookManagement, which never creates authors itself.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from booklog.domain.services import AuthorManagement, BookManagement, ReadingManagement
from booklog.api.v1 import schemas as api
from booklog.api.v1.converters import (
    domain_book_to_api,
    domain_reading_to_api,
    domain_series_to_api,
    form_date,
)
from booklog.api.v1.dependencies import (
    get_author_management,
    get_book_management,
    get_reading_management,
)
from booklog.api.v1.errors import domain_errors

router = APIRouter()


@router.get("/books", response_model=list[api.Book])
def list_books(
    management: BookManagement = Depends(get_book_management),
) -> list[api.Book]:
    """All books ordered by title."""
    return [domain_book_to_api(b) for b in management.find_all_books()]


@router.post("/books", response_model=api.Book, status_code=status.HTTP_201_CREATED)
def create_book(
    form: api.BookForm,
    books: BookManagement = Depends(get_book_management),
    authors: AuthorManagement = Depends(get_author_management),
) -> api.Book:
    """
    Create a book.

    Returns 404 if an author or series id is unknown and 400 if the
    language is not one of GET /languages.
    """
    with domain_errors("book creation"):
        book = books.create_book(
            title=form.title,
            authors=authors.find_authors_by_ids(form.author_ids),
            published=form_date(form.published, "published"),
            isbn=form.isbn,
            pages=form.pages,
            language=form.language,
            series_ids=form.series_ids,
        )
    return domain_book_to_api(book)


@router.get("/books/{book_id}", response_model=api.Book)
def get_book(
    book_id: UUID,
    management: BookManagement = Depends(get_book_management),
) -> api.Book:
    with domain_errors("book lookup"):
        return domain_book_to_api(management.find_book_by_id(book_id))


@router.put("/books/{book_id}", response_model=api.Book)
def update_book(
    book_id: UUID,
    form: api.BookForm,
    books: BookManagement = Depends(get_book_management),
    authors: AuthorManagement = Depends(get_author_management),
) -> api.Book:
    with domain_errors("book update"):
        book = books.update_book(
            book_id,
            title=form.title,
            authors=authors.find_authors_by_ids(form.author_ids),
            published=form_date(form.published, "published"),
            isbn=form.isbn,
            pages=form.pages,
            language=form.language,
            series_ids=form.series_ids,
        )
    return domain_book_to_api(book)


@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: UUID,
    management: BookManagement = Depends(get_book_management),
) -> Response:
    """
    Delete a book, removing it from all series and deleting its readings.
    """
    with domain_errors("book deletion"):
        management.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/books/{book_id}/series", response_model=list[api.Series])
def list_series_of_book(
    book_id: UUID,
    management: BookManagement = Depends(get_book_management),
) -> list[api.Series]:
    with domain_errors("book lookup"):
        book = management.find_book_by_id(book_id)
    return [domain_series_to_api(s) for s in management.find_series_by_book(book)]


@router.get("/books/{book_id}/readings", response_model=list[api.Reading])
def list_readings_of_book(
    book_id: UUID,
    books: BookManagement = Depends(get_book_management),
    readings: ReadingManagement = Depends(get_reading_management),
) -> list[api.Reading]:
    with domain_errors("book lookup"):
        book = books.find_book_by_id(book_id)
    return [domain_reading_to_api(r) for r in readings.find_readings_by_book(book)]
