"""
Field validation helpers shared by the entities and the form layer.

Each helper returns the (possibly normalised) value or raises
MissingValueError / InvalidArgumentError.
"""

import re
from datetime import date, datetime
from typing import Optional, TypeVar

import pycountry

from .errors import InvalidArgumentError, MissingValueError

T = TypeVar("T")

# Accepts ISBN-10 and ISBN-13, with or without an "ISBN:" / "ISBN-13:" prefix
# and with hyphen or space separated groups.
ISBN_REGEX = (
    r"^(?:ISBN(?:-1[03])?:? )?"
    r"(?=[0-9X]{10}$|(?=(?:[0-9]+[- ]){3})[- 0-9X]{13}$|97[89][0-9]{10}$|(?=(?:[0-9]+[- ]){4})[- 0-9]{17}$)"
    r"(?:97[89][- ]?)?[0-9]{1,5}[- ]?[0-9]+[- ]?[0-9]+[- ]?[0-9X]$"
)
ISBN_PATTERN = re.compile(ISBN_REGEX)

_DATE_BODY = r"[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[1-2][0-9]|3[0-1])"
DATE_REGEX = rf"^{_DATE_BODY}$"
OPTIONAL_DATE_REGEX = rf"^({_DATE_BODY})?$"
DATE_PATTERN = re.compile(DATE_REGEX)

COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")
LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2}$")


def require(value: Optional[T], name: str) -> T:
    """Raise MissingValueError if value is None."""
    if value is None:
        raise MissingValueError(f"{name} must not be None")
    return value


def require_text(value: Optional[str], name: str) -> str:
    """Return the trimmed string, rejecting None and blank strings."""
    require(value, name)
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidArgumentError(f"{name} must not be blank")
    return value.strip()


def require_positive(value: Optional[int], name: str) -> int:
    require(value, name)
    # bool is an int subclass but never a page count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")
    return value


def require_date(value: Optional[date], name: str) -> date:
    require(value, name)
    # datetime is a date subclass; a time part would not survive storage
    if isinstance(value, datetime):
        raise InvalidArgumentError(f"{name} must be a date without time, got {value.isoformat()}")
    if not isinstance(value, date):
        raise InvalidArgumentError(f"{name} must be a date, got {type(value).__name__}")
    return value


def optional_date(value: Optional[date], name: str) -> Optional[date]:
    if value is None:
        return None
    return require_date(value, name)


def not_in_future(value: Optional[date], name: str) -> Optional[date]:
    """Reject dates after today; None passes through."""
    if value is not None and value > date.today():
        raise InvalidArgumentError(f"{name} must not be in the future, got {value.isoformat()}")
    return value


def ordered_dates(
    earlier: Optional[date],
    later: Optional[date],
    earlier_name: str,
    later_name: str,
) -> None:
    """Reject earlier > later when both dates are set."""
    if earlier is not None and later is not None and earlier > later:
        raise InvalidArgumentError(
            f"{earlier_name} ({earlier.isoformat()}) must not be after "
            f"{later_name} ({later.isoformat()})"
        )


def require_isbn(value: Optional[str]) -> str:
    isbn = require_text(value, "isbn")
    if not ISBN_PATTERN.match(isbn):
        raise InvalidArgumentError(f"isbn '{isbn}' does not match the ISBN-10/13 format")
    return isbn


def require_country_code(value: Optional[str]) -> str:
    """Return an upper-case ISO 3166-1 alpha-2 code."""
    code = require_text(value, "nationality").upper()
    if not COUNTRY_CODE_PATTERN.match(code):
        raise InvalidArgumentError(
            f"nationality must be a 2-letter ISO 3166-1 country code, got '{value}'"
        )
    if pycountry.countries.get(alpha_2=code) is None:
        raise InvalidArgumentError(f"nationality '{code}' is not an assigned ISO 3166-1 country code")
    return code


def require_language_code(value: Optional[str]) -> str:
    """Return a lower-case ISO 639-1 code."""
    code = require_text(value, "language").lower()
    if not LANGUAGE_CODE_PATTERN.match(code):
        raise InvalidArgumentError(
            f"language must be a 2-letter ISO 639-1 code, got '{value}'"
        )
    return code


def parse_date(value: Optional[str], name: str, *, optional: bool = False) -> Optional[date]:
    """
    Parse a YYYY-MM-DD form string into a date.

    With optional=True an empty or blank string yields None.
    """
    if value is None or not value.strip():
        if optional:
            return None
        raise MissingValueError(f"{name} must not be empty")

    text = value.strip()
    if not DATE_PATTERN.match(text):
        raise InvalidArgumentError(f"{name} must match YYYY-MM-DD, got '{value}'")
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        # e.g. 2023-02-30 passes the pattern but is no calendar date
        raise InvalidArgumentError(f"{name} is not a valid date: '{value}'") from e
