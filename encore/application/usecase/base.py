"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One operation of the ranking API.

    Takes a pydantic request carrying raw UUIDs and returns a pydantic
    response with string IDs, ready for JSON.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
