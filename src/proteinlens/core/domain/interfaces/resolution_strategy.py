"""Interface for identifier resolution strategies."""

from abc import ABC, abstractmethod
from typing import Optional


class ResolutionStrategy(ABC):
    """Abstract base class for one step of the identifier fallback chain."""

    #: Short name recorded on a successful resolution
    name: str = "strategy"
    #: Position of this strategy's step in the chain (1-based)
    step: int = 0

    @abstractmethod
    async def attempt(self, identifier: str) -> Optional[str]:
        """
        Try to resolve an identifier to a canonical accession.

        Args:
            identifier: Identifier as supplied by the caller

        Returns:
            Canonical accession, or None when this strategy has no answer

        Raises:
            CatalogError: If an external call made by the strategy fails
        """
        pass
