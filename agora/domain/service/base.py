"""Base service class for domain services."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy.exc import SQLAlchemyError

from agora.domain.error import StorageError


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise any persistence failure inside the block as StorageError.

    Domain errors raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logfire.error(
            "Storage failure",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise StorageError(operation) from e
