"""Abstract base class for repositories following the Repository Pattern."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, List, Optional

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Generic read-only repository interface.

    Retrieval is a coroutine because entities may live behind a network call.
    """

    @abstractmethod
    async def get(self, id: str) -> Optional[T]:
        """Retrieve an entity by ID."""
        pass

    @abstractmethod
    def list(self) -> List[str]:
        """List the IDs of all locally available entities."""
        pass
