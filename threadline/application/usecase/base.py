"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from threadline.domain.error import InvalidInputError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_id(value: str, field: str) -> UUID:
    """Parse an identifier coming from a request.

    Raises:
        InvalidInputError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Invalid {field}: {value!r}") from None
