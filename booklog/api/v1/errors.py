"""
Translation of domain errors into HTTP errors.

- NotFoundError -> 404
- ValueError (MissingValueError, InvalidArgumentError) -> 400
- RuntimeError (database failures) -> 503
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from booklog.domain.errors import NotFoundError

logger = logging.getLogger(__name__)


@contextmanager
def domain_errors(action: str) -> Iterator[None]:
    """Run a service call and re-raise its domain errors as HTTPException."""
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except ValueError as e:
        logger.warning("Rejected %s: %s", action, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except RuntimeError as e:
        logger.error("Storage failure during %s: %s", action, e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        ) from e
