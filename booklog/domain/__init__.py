"""
Domain layer - Core business logic and entities.

This layer contains the library entities, value objects, errors, and
defines the ports (interfaces) that the infrastructure layer must implement.

It has NO dependencies on external frameworks, databases, or APIs.
"""

from .entities import Author, Book, Series, Reading
from .errors import BooklogError, InvalidArgumentError, MissingValueError, NotFoundError
from .value_objects import LanguageConfig, ReadingState

__all__ = [
    # Entities
    "Author",
    "Book",
    "Series",
    "Reading",
    # Value Objects
    "LanguageConfig",
    "ReadingState",
    # Errors
    "BooklogError",
    "MissingValueError",
    "InvalidArgumentError",
    "NotFoundError",
]
