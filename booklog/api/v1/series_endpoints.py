"""
API endpoints for series.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from booklog.domain.services import BookManagement
from booklog.api.v1 import schemas as api
from booklog.api.v1.converters import domain_series_to_api
from booklog.api.v1.dependencies import get_book_management
from booklog.api.v1.errors import domain_errors

router = APIRouter()


@router.get("/series", response_model=list[api.Series])
def list_series(
    management: BookManagement = Depends(get_book_management),
) -> list[api.Series]:
    return [domain_series_to_api(s) for s in management.find_all_series()]


@router.post("/series", response_model=api.Series, status_code=status.HTTP_201_CREATED)
def create_series(
    form: api.SeriesForm,
    management: BookManagement = Depends(get_book_management),
) -> api.Series:
    with domain_errors("series creation"):
        series = management.create_series(
            title=form.title,
            books=management.find_books_by_ids(form.book_ids),
        )
    return domain_series_to_api(series)


@router.get("/series/{series_id}", response_model=api.Series)
def get_series(
    series_id: UUID,
    management: BookManagement = Depends(get_book_management),
) -> api.Series:
    with domain_errors("series lookup"):
        return domain_series_to_api(management.find_series_by_id(series_id))


@router.put("/series/{series_id}", response_model=api.Series)
def update_series(
    series_id: UUID,
    form: api.SeriesForm,
    management: BookManagement = Depends(get_book_management),
) -> api.Series:
    """Rename a series and replace its books with form.book_ids."""
    with domain_errors("series update"):
        series = management.update_series(
            series_id,
            title=form.title,
            books=management.find_books_by_ids(form.book_ids),
        )
    return domain_series_to_api(series)


@router.post("/series/{series_id}/books", response_model=api.Series)
def add_books_to_series(
    series_id: UUID,
    form: api.AddBooksForm,
    management: BookManagement = Depends(get_book_management),
) -> api.Series:
    """Add books to a series; books already in it are ignored."""
    with domain_errors("series update"):
        series = management.add_books_to_series(
            management.find_books_by_ids(form.book_ids),
            series_id,
        )
    return domain_series_to_api(series)


@router.delete("/series/{series_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_series(
    series_id: UUID,
    management: BookManagement = Depends(get_book_management),
) -> Response:
    """Delete a series. Its books are kept."""
    with domain_errors("series deletion"):
        management.delete_series(series_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
