"""
API endpoints for reading sessions.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from booklog.domain.services import BookManagement, ReadingManagement
from booklog.api.v1 import schemas as api
from booklog.api.v1.converters import (
    domain_reading_to_api,
    form_date,
    form_optional_date,
)
from booklog.api.v1.dependencies import get_book_management, get_reading_management
from booklog.api.v1.errors import domain_errors

router = APIRouter()


@router.get("/readings", response_model=list[api.Reading])
def list_readings(
    in_progress: bool = False,
    management: ReadingManagement = Depends(get_reading_management),
) -> list[api.Reading]:
    """
    All readings, most recent beginning first.

    With ?in_progress=true only unfinished readings are returned.
    """
    readings = (
        management.find_readings_in_progress() if in_progress
        else management.find_all_readings()
    )
    return [domain_reading_to_api(r) for r in readings]


@router.post("/readings", response_model=api.Reading, status_code=status.HTTP_201_CREATED)
def create_reading(
    form: api.ReadingForm,
    readings: ReadingManagement = Depends(get_reading_management),
    books: BookManagement = Depends(get_book_management),
) -> api.Reading:
    """
    Start (or log) a reading of a book.

    Returns 400 if end is before beginning, 404 if the book is unknown.
    """
    with domain_errors("reading creation"):
        reading = readings.create_reading(
            books.find_book_by_id(form.book_id),
            form_date(form.beginning, "beginning"),
            form_optional_date(form.end, "end"),
            pages_per_hour=form.pages_per_hour,
        )
    return domain_reading_to_api(reading)


@router.get("/readings/{reading_id}", response_model=api.Reading)
def get_reading(
    reading_id: UUID,
    management: ReadingManagement = Depends(get_reading_management),
) -> api.Reading:
    with domain_errors("reading lookup"):
        return domain_reading_to_api(management.find_reading_by_id(reading_id))


@router.put("/readings/{reading_id}", response_model=api.Reading)
def update_reading(
    reading_id: UUID,
    form: api.ReadingUpdateForm,
    management: ReadingManagement = Depends(get_reading_management),
) -> api.Reading:
    with domain_errors("reading update"):
        reading = management.update_reading(
            reading_id,
            beginning=form_date(form.beginning, "beginning"),
            end=form_optional_date(form.end, "end"),
            pages_per_hour=form.pages_per_hour,
        )
    return domain_reading_to_api(reading)


@router.delete("/readings/{reading_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reading(
    reading_id: UUID,
    management: ReadingManagement = Depends(get_reading_management),
) -> Response:
    with domain_errors("reading deletion"):
        management.delete_reading(reading_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
