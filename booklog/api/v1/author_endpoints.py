"""
API endpoints for authors.

This module defines the FastAPI routes for listing, creating, editing and
deleting authors. It handles HTTP concerns and delegates to AuthorManagement.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from booklog.domain.services import AuthorManagement, BookManagement
from booklog.api.v1 import schemas as api
from booklog.api.v1.converters import (
    domain_author_to_api,
    domain_book_to_api,
    form_optional_date,
)
from booklog.api.v1.dependencies import get_author_management, get_book_management
from booklog.api.v1.errors import domain_errors

router = APIRouter()


@router.get("/authors", response_model=list[api.Author])
def list_authors(
    management: AuthorManagement = Depends(get_author_management),
) -> list[api.Author]:
    """All authors ordered by last name, then first name."""
    return [domain_author_to_api(a) for a in management.find_all_authors()]


@router.post("/authors", response_model=api.Author, status_code=status.HTTP_201_CREATED)
def create_author(
    form: api.AuthorForm,
    management: AuthorManagement = Depends(get_author_management),
) -> api.Author:
    """
    Create an author.

    Returns 400 if the dates are in the future or out of order.
    """
    with domain_errors("author creation"):
        author = management.create_author(
            first_name=form.first_name,
            last_name=form.last_name,
            nationality=form.country_code,
            birth_date=form_optional_date(form.birth_date, "birth_date"),
            death_date=form_optional_date(form.death_date, "death_date"),
        )
    return domain_author_to_api(author)


@router.get("/authors/{author_id}", response_model=api.Author)
def get_author(
    author_id: UUID,
    management: AuthorManagement = Depends(get_author_management),
) -> api.Author:
    with domain_errors("author lookup"):
        return domain_author_to_api(management.find_author_by_id(author_id))


@router.put("/authors/{author_id}", response_model=api.Author)
def update_author(
    author_id: UUID,
    form: api.AuthorForm,
    management: AuthorManagement = Depends(get_author_management),
) -> api.Author:
    with domain_errors("author update"):
        author = management.update_author(
            author_id,
            first_name=form.first_name,
            last_name=form.last_name,
            nationality=form.country_code,
            birth_date=form_optional_date(form.birth_date, "birth_date"),
            death_date=form_optional_date(form.death_date, "death_date"),
        )
    return domain_author_to_api(author)


@router.delete("/authors/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_author(
    author_id: UUID,
    management: AuthorManagement = Depends(get_author_management),
) -> Response:
    """
    Delete an author.

    Books written only by this author are deleted too (with their readings);
    co-authored books are kept.
    """
    with domain_errors("author deletion"):
        management.delete_author(author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/authors/{author_id}/books", response_model=list[api.Book])
def list_books_of_author(
    author_id: UUID,
    authors: AuthorManagement = Depends(get_author_management),
    books: BookManagement = Depends(get_book_management),
) -> list[api.Book]:
    with domain_errors("author lookup"):
        author = authors.find_author_by_id(author_id)
    return [domain_book_to_api(b) for b in books.find_books_by_author(author)]
