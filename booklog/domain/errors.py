"""
Domain exceptions.

Every failure in the domain layer is one of three kinds:

- MissingValueError: a required value was None
- InvalidArgumentError: a value is present but breaks a business rule
- NotFoundError: a referenced id does not exist in storage

The first two subclass ValueError so callers that only care about
"bad input" can keep catching ValueError.
"""


class BooklogError(Exception):
    """Base class for all domain errors."""


class MissingValueError(BooklogError, ValueError):
    """A required field or reference was None."""


class InvalidArgumentError(BooklogError, ValueError):
    """A present value violates a business rule."""


class NotFoundError(BooklogError, LookupError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} with id '{entity_id}' not found")
        self.entity = entity
        self.entity_id = entity_id
