"""
Tests for ReadingManagement.

Uses fake/spy implementations of the ports so the service is tested in
isolation:
- FakeReadingRepository keeps readings in a dict and records calls
- FakeTransactionManager counts the transaction blocks that were opened
"""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest

from booklog.domain.entities import Author, Book, Reading
from booklog.domain.errors import InvalidArgumentError, NotFoundError
from booklog.domain.services import ReadingManagement


# =============================================================================
# Fake implementations for testing
# =============================================================================


class FakeReadingRepository:
    """In-memory reading repository with spy capabilities."""

    def __init__(self):
        self._readings: Dict[UUID, Reading] = {}
        self.save_calls: List[Reading] = []
        self.delete_calls: List[Reading] = []

    def save(self, reading: Reading) -> Reading:
        self.save_calls.append(reading)
        self._readings[reading.id] = reading
        return reading

    def get_by_id(self, reading_id: UUID) -> Optional[Reading]:
        return self._readings.get(reading_id)

    def get_all(self) -> List[Reading]:
        return sorted(self._readings.values(), key=lambda r: r.beginning, reverse=True)

    def find_by_book(self, book: Book) -> List[Reading]:
        return [r for r in self.get_all() if r.book == book]

    def find_in_progress(self) -> List[Reading]:
        return [r for r in self.get_all() if r.end is None]

    def count(self) -> int:
        return len(self._readings)

    def delete(self, reading: Reading) -> None:
        self.delete_calls.append(reading)
        self._readings.pop(reading.id, None)

    def delete_by_id(self, reading_id: UUID) -> bool:
        return self._readings.pop(reading_id, None) is not None


class FakeTransactionManager:
    """Counts opened transaction blocks."""

    def __init__(self):
        self.opened = 0

    @contextmanager
    def transaction(self):
        self.opened += 1
        yield None


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def repo() -> FakeReadingRepository:
    return FakeReadingRepository()


@pytest.fixture
def transactions() -> FakeTransactionManager:
    return FakeTransactionManager()


@pytest.fixture
def service(repo, transactions) -> ReadingManagement:
    return ReadingManagement(reading_repo=repo, transactions=transactions)


@pytest.fixture
def dune() -> Book:
    herbert = Author.create_new("Frank", "Herbert", "US", date(1920, 10, 8), date(1986, 2, 11))
    return Book.create_new("Dune", [herbert], date(1965, 8, 1), "9780441013593", 412, "en")


@pytest.fixture
def messiah(dune) -> Book:
    return Book.create_new("Dune Messiah", dune.authors, date(1969, 10, 15), "0399128964", 256, "en")


# =============================================================================
# Tests
# =============================================================================


class TestCreateReading:

    def test_create_saves_in_transaction(self, service, repo, transactions, dune):
        reading = service.create_reading(dune, date(2024, 5, 1), pages_per_hour=35)

        assert repo.save_calls == [reading]
        assert transactions.opened == 1
        assert not reading.is_finished()

    def test_end_before_beginning_not_saved(self, service, repo, dune):
        with pytest.raises(InvalidArgumentError):
            service.create_reading(dune, date(2024, 5, 2), date(2024, 5, 1), pages_per_hour=35)
        assert repo.save_calls == []

    def test_datetime_beginning_not_saved(self, service, repo, dune):
        with pytest.raises(InvalidArgumentError):
            service.create_reading(dune, datetime(2024, 1, 3, 12, 0), pages_per_hour=40)
        assert repo.save_calls == []


class TestUpdateReading:

    def test_update_period_and_pace(self, service, dune):
        reading = service.create_reading(dune, date(2024, 5, 1), pages_per_hour=35)

        updated = service.update_reading(reading.id, date(2024, 5, 2), date(2024, 5, 20), 50)

        assert updated.beginning == date(2024, 5, 2)
        assert updated.end == date(2024, 5, 20)
        assert updated.pages_per_hour == 50
        assert updated.book == dune

    def test_clearing_end_reopens(self, service, dune):
        reading = service.create_reading(dune, date(2024, 5, 1), date(2024, 5, 3), pages_per_hour=35)
        assert service.update_reading(reading.id, date(2024, 5, 1), None, 35).end is None

    def test_rejected_update_not_saved(self, service, repo, dune):
        reading = service.create_reading(dune, date(2024, 5, 1), pages_per_hour=35)

        with pytest.raises(InvalidArgumentError):
            service.update_reading(reading.id, date(2024, 5, 1), None, 0)
        assert len(repo.save_calls) == 1

    def test_update_unknown_reading(self, service):
        with pytest.raises(NotFoundError, match="Reading"):
            service.update_reading(uuid4(), date(2024, 5, 1), None, 35)


class TestDeleteReadings:

    def test_delete_by_entity_and_id(self, service, dune):
        first = service.create_reading(dune, date(2024, 1, 1), pages_per_hour=35)
        second = service.create_reading(dune, date(2024, 2, 1), pages_per_hour=35)

        service.delete_reading(first)
        service.delete_reading(second.id)

        assert service.get_reading_count() == 0

    def test_delete_unknown_reading(self, service):
        with pytest.raises(NotFoundError):
            service.delete_reading(uuid4())

    def test_delete_readings_by_book_only_touches_that_book(self, service, repo, dune, messiah):
        service.create_reading(dune, date(2024, 1, 1), pages_per_hour=35)
        service.create_reading(dune, date(2024, 3, 1), pages_per_hour=35)
        kept = service.create_reading(messiah, date(2024, 2, 1), pages_per_hour=35)

        assert service.delete_readings_by_book(dune) == 2
        assert len(repo.delete_calls) == 2
        assert service.find_all_readings() == [kept]


class TestQueries:

    def test_find_all_most_recent_first(self, service, dune):
        old = service.create_reading(dune, date(2023, 1, 1), date(2023, 1, 20), pages_per_hour=35)
        new = service.create_reading(dune, date(2024, 1, 1), pages_per_hour=35)

        assert service.find_all_readings() == [new, old]

    def test_find_in_progress(self, service, dune, messiah):
        service.create_reading(dune, date(2023, 1, 1), date(2023, 1, 20), pages_per_hour=35)
        current = service.create_reading(messiah, date(2024, 1, 1), pages_per_hour=35)

        assert service.find_readings_in_progress() == [current]

    def test_find_in_progress_most_recent_first(self, service, dune, messiah):
        older = service.create_reading(dune, date(2023, 1, 1), pages_per_hour=35)
        newer = service.create_reading(messiah, date(2024, 1, 1), pages_per_hour=35)

        assert service.find_readings_in_progress() == [newer, older]

    def test_find_by_book(self, service, dune, messiah):
        reading = service.create_reading(messiah, date(2024, 1, 1), pages_per_hour=35)
        service.create_reading(dune, date(2024, 1, 1), pages_per_hour=35)

        assert service.find_readings_by_book(messiah) == [reading]

    def test_find_by_id(self, service, dune):
        reading = service.create_reading(dune, date(2024, 1, 1), pages_per_hour=35)
        assert service.find_reading_by_id(reading.id) is reading
