"""
Domain service managing authors.

Deleting an author is the one operation that reaches across entities:
books the author wrote alone are deleted (with everything
BookManagement.delete_book cascades to), co-authored books keep their
remaining authors. The whole cascade is one transaction.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Union
from uuid import UUID

from booklog.domain.entities import Author
from booklog.domain.errors import NotFoundError
from booklog.domain.ports import AuthorRepository, TransactionManager

from .book_management import BookManagement

logger = logging.getLogger(__name__)


class AuthorManagement:
    """
    Creates, updates, deletes and looks up Author entities.
    """

    def __init__(
        self,
        author_repo: AuthorRepository,
        book_management: BookManagement,
        transactions: TransactionManager,
    ) -> None:
        self._author_repo = author_repo
        self._book_management = book_management
        self._transactions = transactions

    def create_author(
        self,
        first_name: str,
        last_name: str,
        nationality: str,
        birth_date: Optional[date] = None,
        death_date: Optional[date] = None,
    ) -> Author:
        """
        Create and persist a new author.

        Raises:
            MissingValueError: If a name or the nationality is None
            InvalidArgumentError: If a name is blank, a date lies in the future,
                birth_date is after death_date or nationality is malformed
        """
        author = Author.create_new(first_name, last_name, nationality, birth_date, death_date)
        with self._transactions.transaction():
            return self._author_repo.save(author)

    def update_author(
        self,
        author_id: UUID,
        first_name: str,
        last_name: str,
        nationality: str,
        birth_date: Optional[date] = None,
        death_date: Optional[date] = None,
    ) -> Author:
        """
        Update every field of a stored author.

        The author is only saved after all setters succeeded.

        Raises:
            NotFoundError: If author_id is unknown
        """
        with self._transactions.transaction():
            author = self.find_author_by_id(author_id)
            author.first_name = first_name
            author.last_name = last_name
            author.nationality = nationality
            author.set_life_dates(birth_date, death_date)
            return self._author_repo.save(author)

    def delete_author(self, author: Union[Author, UUID]) -> None:
        """
        Delete an author together with the books only they wrote.

        Co-authored books are kept and lose this author.

        Raises:
            NotFoundError: If the author is not stored
        """
        author_id = author.id if isinstance(author, Author) else author

        with self._transactions.transaction():
            author = self.find_author_by_id(author_id)

            deleted = updated = 0
            for book in self._book_management.find_books_by_author(author):
                if book.has_sole_author(author):
                    self._book_management.delete_book(book)
                    deleted += 1
                else:
                    self._book_management.remove_author_from_book(book, author)
                    updated += 1

            self._author_repo.delete(author)

        logger.debug(
            "Deleted author %s (%d books deleted, %d co-authored books updated)",
            author_id, deleted, updated,
        )

    def find_all_authors(self) -> List[Author]:
        """All authors ordered by last name, then first name."""
        return self._author_repo.get_all()

    def find_author_by_id(self, author_id: UUID) -> Author:
        """
        Raises:
            NotFoundError: If author_id is unknown
        """
        author = self._author_repo.get_by_id(author_id)
        if author is None:
            raise NotFoundError("Author", author_id)
        return author

    def find_authors_by_ids(self, author_ids: Iterable[UUID]) -> List[Author]:
        """
        Resolve a list of ids (e.g. from a form) to authors, keeping the order.

        Raises:
            NotFoundError: On the first unknown id
        """
        return [self.find_author_by_id(author_id) for author_id in dict.fromkeys(author_ids)]

    def get_author_count(self) -> int:
        return self._author_repo.count()
