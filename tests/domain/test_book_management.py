"""
Tests for BookManagement (books and series).

=============================================================================
What we verify
=============================================================================
1. Book create/update: validation, configured languages, series ids
2. Book delete cascade: series lose the book, readings are deleted
3. Series operations: idempotent adds, deletes that never touch books
4. Atomicity: a failing step rolls back the whole cascade
=============================================================================
"""

from datetime import date
from uuid import uuid4

import pytest

from booklog.domain.entities import Author
from booklog.domain.errors import InvalidArgumentError, NotFoundError
from booklog.domain.services import BookManagement, ReadingManagement
from booklog.domain.value_objects import LanguageConfig
from booklog.infrastructure.db import (
    SqliteBookRepository,
    SqliteReadingRepository,
    SqliteSeriesRepository,
)


@pytest.fixture
def great_hunt(books, robert):
    return books.create_book("The Great Hunt", [robert], date(1990, 11, 15), "0-312-85140-5", 705, "en")


@pytest.fixture
def wheel_of_time(books, eye_of_the_world, great_hunt):
    return books.create_series("The Wheel of Time", [great_hunt, eye_of_the_world])


# =============================================================================
# Books
# =============================================================================


class TestCreateBook:

    def test_create_and_find(self, books, eye_of_the_world, robert):
        stored = books.find_book_by_id(eye_of_the_world.id)

        assert stored.title == "The Eye of the World"
        assert stored.authors == frozenset({robert})
        assert stored.published == date(1990, 1, 15)
        assert stored.language == "en"
        assert books.get_book_count() == 1

    def test_empty_author_set_rejected(self, books):
        with pytest.raises(InvalidArgumentError):
            books.create_book("No Author", [], date(2000, 1, 1), "0306406152", 10, "en")
        assert books.get_book_count() == 0

    def test_unconfigured_language_rejected(self, books, robert):
        with pytest.raises(InvalidArgumentError, match="language"):
            books.create_book("Title", [robert], date(2000, 1, 1), "0306406152", 10, "fr")

    def test_custom_language_config(self, database, readings, robert):
        french = BookManagement(
            book_repo=SqliteBookRepository(database),
            series_repo=SqliteSeriesRepository(database),
            reading_management=readings,
            transactions=database,
            languages=LanguageConfig(("fr",)),
        )
        book = french.create_book("Le Dragon", [robert], date(2000, 1, 1), "0306406152", 10, "FR")
        assert book.language == "fr"

    def test_unsaved_author_rejected_by_storage(self, books):
        """An author that was never stored violates the foreign key."""
        ghost = Author.create_new("Ghost", "Writer", "US")
        with pytest.raises(InvalidArgumentError):
            books.create_book("Ghosted", [ghost], date(2000, 1, 1), "0306406152", 10, "en")
        assert books.get_book_count() == 0

    def test_create_with_series_ids(self, books, robert):
        series = books.create_series("The Wheel of Time")
        book = books.create_book(
            "The Dragon Reborn", [robert], date(1991, 9, 15), "0312852487", 624, "en",
            series_ids=[series.id],
        )
        assert books.find_series_by_book(book) == [series]

    def test_unknown_series_id_rolls_back_creation(self, books, robert):
        with pytest.raises(NotFoundError):
            books.create_book(
                "The Dragon Reborn", [robert], date(1991, 9, 15), "0312852487", 624, "en",
                series_ids=[uuid4()],
            )
        assert books.get_book_count() == 0


class TestUpdateBook:

    def test_update_all_fields(self, books, eye_of_the_world, robert, brandon):
        books.update_book(
            eye_of_the_world.id, "The Eye of the World (Revised)", [robert, brandon],
            date(1990, 1, 16), "9780312850098", 700, "de",
        )

        stored = books.find_book_by_id(eye_of_the_world.id)
        assert stored.title == "The Eye of the World (Revised)"
        assert stored.authors == frozenset({robert, brandon})
        assert stored.pages == 700
        assert stored.language == "de"

    def test_rejected_update_changes_nothing(self, books, eye_of_the_world):
        with pytest.raises(InvalidArgumentError):
            books.update_book(
                eye_of_the_world.id, "New Title", eye_of_the_world.authors,
                date(1990, 1, 15), "ISBN", 685, "en",
            )
        assert books.find_book_by_id(eye_of_the_world.id).title == "The Eye of the World"

    def test_update_replaces_series(self, books, eye_of_the_world, wheel_of_time):
        prequels = books.create_series("Prequels")

        books.update_book(
            eye_of_the_world.id, eye_of_the_world.title, eye_of_the_world.authors,
            eye_of_the_world.published, eye_of_the_world.isbn, eye_of_the_world.pages,
            eye_of_the_world.language, series_ids=[prequels.id],
        )

        assert books.find_series_by_book(eye_of_the_world) == [prequels]
        assert eye_of_the_world not in books.find_series_by_id(wheel_of_time.id)

    def test_update_without_series_ids_keeps_series(self, books, eye_of_the_world, wheel_of_time):
        books.update_book(
            eye_of_the_world.id, "Renamed", eye_of_the_world.authors,
            eye_of_the_world.published, eye_of_the_world.isbn, eye_of_the_world.pages, "en",
        )
        assert books.find_series_by_book(eye_of_the_world) == [wheel_of_time]

    def test_update_unknown_book(self, books, robert):
        with pytest.raises(NotFoundError):
            books.update_book(uuid4(), "T", [robert], date(2000, 1, 1), "0306406152", 1, "en")


class TestDeleteBook:
    """Cascading delete of a book."""

    def test_removes_book_from_series_but_keeps_series(self, books, eye_of_the_world, great_hunt, wheel_of_time):
        books.delete_book(eye_of_the_world)

        series = books.find_series_by_id(wheel_of_time.id)
        assert series.books == [great_hunt]
        assert books.get_series_count() == 1

    def test_two_in_progress_readings_deleted_with_book(self, books, readings, eye_of_the_world, great_hunt):
        readings.create_reading(eye_of_the_world, date(2024, 1, 1), pages_per_hour=40)
        readings.create_reading(eye_of_the_world, date(2024, 3, 1), pages_per_hour=45)
        readings.create_reading(great_hunt, date(2024, 2, 1), pages_per_hour=40)
        before = readings.get_reading_count()

        books.delete_book(eye_of_the_world.id)

        assert readings.get_reading_count() == before - 2
        assert [r.book for r in readings.find_all_readings()] == [great_hunt]

    def test_author_count_unaffected(self, books, authors, eye_of_the_world):
        books.delete_book(eye_of_the_world)
        assert authors.get_author_count() == 1

    def test_delete_unknown_book(self, books):
        with pytest.raises(NotFoundError, match="Book"):
            books.delete_book(uuid4())

    def test_failing_step_rolls_back_whole_cascade(self, database, robert):
        """If deleting the readings fails, the series keep the book."""

        class FailingReadingRepository(SqliteReadingRepository):
            def delete(self, reading):
                raise RuntimeError("disk full")

        readings = ReadingManagement(FailingReadingRepository(database), database)
        books = BookManagement(
            SqliteBookRepository(database), SqliteSeriesRepository(database), readings, database,
        )
        book = books.create_book("Crossroads of Twilight", [robert], date(2003, 1, 7), "0312864590", 681, "en")
        series = books.create_series("The Wheel of Time", [book])
        readings.create_reading(book, date(2024, 1, 1), pages_per_hour=40)

        with pytest.raises(RuntimeError, match="disk full"):
            books.delete_book(book)

        assert book in books.find_series_by_id(series.id)
        assert books.get_book_count() == 1
        assert readings.get_reading_count() == 1


class TestRemoveAuthorFromBook:

    def test_co_author_removed(self, books, robert, brandon):
        book = books.create_book("Towers of Midnight", [robert, brandon], date(2010, 11, 2), "9780765325945", 864, "en")

        books.remove_author_from_book(book, brandon)

        assert books.find_book_by_id(book.id).authors == frozenset({robert})

    def test_last_author_cannot_be_removed(self, books, eye_of_the_world, robert):
        with pytest.raises(InvalidArgumentError):
            books.remove_author_from_book(eye_of_the_world, robert)


class TestBookQueries:

    def test_find_all_ordered_by_title(self, books, eye_of_the_world, great_hunt):
        assert books.find_all_books() == [eye_of_the_world, great_hunt]

    def test_find_by_author(self, books, eye_of_the_world, brandon):
        mistborn = books.create_book("Mistborn", [brandon], date(2006, 7, 17), "0765311780", 541, "en")
        assert books.find_books_by_author(brandon) == [mistborn]

    def test_find_by_ids(self, books, eye_of_the_world, great_hunt):
        assert books.find_books_by_ids([great_hunt.id, eye_of_the_world.id]) == [great_hunt, eye_of_the_world]


# =============================================================================
# Series
# =============================================================================


class TestSeriesManagement:

    def test_create_empty_series(self, books):
        series = books.create_series("To Be Written")
        assert len(books.find_series_by_id(series.id)) == 0

    def test_stored_books_ordered_by_publication(self, books, wheel_of_time, eye_of_the_world, great_hunt):
        assert books.find_series_by_id(wheel_of_time.id).books == [eye_of_the_world, great_hunt]

    def test_update_replaces_title_and_books(self, books, wheel_of_time, great_hunt):
        books.update_series(wheel_of_time.id, "WoT", [great_hunt])

        stored = books.find_series_by_id(wheel_of_time.id)
        assert stored.title == "WoT"
        assert stored.books == [great_hunt]

    def test_update_with_none_empties_series(self, books, wheel_of_time):
        books.update_series(wheel_of_time.id, "WoT")
        assert len(books.find_series_by_id(wheel_of_time.id)) == 0

    def test_add_books_is_idempotent(self, books, eye_of_the_world, great_hunt):
        series = books.create_series("The Wheel of Time", [eye_of_the_world])

        books.add_books_to_series(eye_of_the_world, series.id)
        books.add_books_to_series([eye_of_the_world, great_hunt], series.id)

        assert books.find_series_by_id(series.id).books == [eye_of_the_world, great_hunt]

    def test_add_books_to_unknown_series(self, books, eye_of_the_world):
        with pytest.raises(NotFoundError, match="Series"):
            books.add_books_to_series(eye_of_the_world, uuid4())

    def test_delete_series_keeps_books_and_readings(self, books, readings, wheel_of_time, eye_of_the_world):
        readings.create_reading(eye_of_the_world, date(2024, 1, 1), pages_per_hour=40)

        books.delete_series(wheel_of_time.id)

        assert books.get_series_count() == 0
        assert books.get_book_count() == 2
        assert readings.get_reading_count() == 1

    def test_delete_unknown_series(self, books):
        with pytest.raises(NotFoundError):
            books.delete_series(uuid4())

    def test_remove_book_from_all_series(self, books, eye_of_the_world, wheel_of_time):
        other = books.create_series("Favourites", [eye_of_the_world])

        assert books.remove_book_from_all_series(eye_of_the_world) == 2
        assert books.find_series_by_book(eye_of_the_world) == []
        assert books.get_series_count() == 2
        assert len(books.find_series_by_id(other.id)) == 0

    def test_set_series_of_book_unknown_id_changes_nothing(self, books, eye_of_the_world, wheel_of_time):
        with pytest.raises(NotFoundError):
            books.set_series_of_book(eye_of_the_world, [uuid4()])
        assert books.find_series_by_book(eye_of_the_world) == [wheel_of_time]

    def test_series_authors_ordered_by_contribution(self, books, wheel_of_time, robert, brandon, great_hunt):
        shared = books.create_book("A Memory of Light", [robert, brandon], date(2013, 1, 8), "9780765325952", 912, "en")
        books.add_books_to_series(shared, wheel_of_time.id)

        stored = books.find_series_by_id(wheel_of_time.id)
        assert stored.authors == [robert, brandon]
        assert stored.author_string == "Robert Jordan, Brandon Sanderson"

    def test_find_all_series_ordered_by_title(self, books, wheel_of_time):
        other = books.create_series("Mistborn")
        assert books.find_all_series() == [other, wheel_of_time]
