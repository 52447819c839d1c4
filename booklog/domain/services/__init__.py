"""
Domain services package.

Services orchestrate domain logic that doesn't naturally belong to a single
entity. They coordinate between entities and ports to implement use cases.

Following Hexagonal Architecture principles, services depend only on domain
entities, value objects, and port protocols (never on concrete implementations).
"""

from .reading_management import ReadingManagement
from .book_management import BookManagement
from .author_management import AuthorManagement

__all__ = [
    "ReadingManagement",
    "BookManagement",
    "AuthorManagement",
]
