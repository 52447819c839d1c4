"""
Domain service managing reading sessions.

Every mutating operation runs inside one transaction of the injected
TransactionManager. BookManagement calls delete_readings_by_book() from
inside its own transaction when a book is deleted; the nested block joins
that outer transaction.
"""

from datetime import date
from typing import List, Optional, Union
from uuid import UUID

from booklog.domain.entities import Book, Reading
from booklog.domain.errors import NotFoundError
from booklog.domain.ports import ReadingRepository, TransactionManager


class ReadingManagement:
    """
    Creates, updates, deletes and looks up Reading entities.

    Usage:
        readings = ReadingManagement(reading_repo=repo, transactions=db)
        reading = readings.create_reading(book, date(2024, 1, 3), pages_per_hour=40)
    """

    def __init__(self, reading_repo: ReadingRepository, transactions: TransactionManager) -> None:
        self._reading_repo = reading_repo
        self._transactions = transactions

    def create_reading(
        self,
        book: Book,
        beginning: date,
        end: Optional[date] = None,
        *,
        pages_per_hour: int,
    ) -> Reading:
        """
        Create and persist a new reading of the given (stored) book.

        Raises:
            MissingValueError: If book or beginning is None
            InvalidArgumentError: If end precedes beginning or pages_per_hour <= 0
        """
        reading = Reading.create_new(book, beginning, end, pages_per_hour=pages_per_hour)
        with self._transactions.transaction():
            return self._reading_repo.save(reading)

    def update_reading(
        self,
        reading_id: UUID,
        beginning: date,
        end: Optional[date],
        pages_per_hour: int,
    ) -> Reading:
        """
        Update dates and pace of a reading. The book cannot be changed.

        Nothing is persisted if any new value is rejected.

        Raises:
            NotFoundError: If reading_id is unknown
        """
        with self._transactions.transaction():
            reading = self.find_reading_by_id(reading_id)
            reading.set_period(beginning, end)
            reading.pages_per_hour = pages_per_hour
            return self._reading_repo.save(reading)

    def delete_reading(self, reading: Union[Reading, UUID]) -> None:
        """
        Delete a reading given the entity or its id.

        Raises:
            NotFoundError: If the reading is not stored
        """
        reading_id = reading.id if isinstance(reading, Reading) else reading
        with self._transactions.transaction():
            if not self._reading_repo.delete_by_id(reading_id):
                raise NotFoundError("Reading", reading_id)

    def delete_readings_by_book(self, book: Book) -> int:
        """Delete every reading of the book. Returns how many were deleted."""
        with self._transactions.transaction():
            readings = self._reading_repo.find_by_book(book)
            for reading in readings:
                self._reading_repo.delete(reading)
            return len(readings)

    def find_all_readings(self) -> List[Reading]:
        """All readings, most recent beginning first."""
        return self._reading_repo.get_all()

    def find_readings_in_progress(self) -> List[Reading]:
        return self._reading_repo.find_in_progress()

    def find_reading_by_id(self, reading_id: UUID) -> Reading:
        """
        Raises:
            NotFoundError: If reading_id is unknown
        """
        reading = self._reading_repo.get_by_id(reading_id)
        if reading is None:
            raise NotFoundError("Reading", reading_id)
        return reading

    def find_readings_by_book(self, book: Book) -> List[Reading]:
        return self._reading_repo.find_by_book(book)

    def get_reading_count(self) -> int:
        return self._reading_repo.count()
