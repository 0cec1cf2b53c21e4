"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from agora.domain.error import InvalidInputError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_uuid(value: str, field: str) -> UUID:
    """Parse an id taken from a request.

    Raises:
        InvalidInputError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except ValueError as e:
        raise InvalidInputError(f"{field} is not a valid id: {value!r}") from e


def parse_optional_uuid(value: Optional[str], field: str) -> Optional[UUID]:
    return parse_uuid(value, field) if value is not None else None
