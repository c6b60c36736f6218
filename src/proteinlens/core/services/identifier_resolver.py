#!/usr/bin/env python3
# src/proteinlens/core/services/identifier_resolver.py

"""
Service resolving arbitrary identifiers to canonical protein accessions.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from ..domain.implementations import (
    AccessionFormatStrategy,
    AccessionSearchStrategy,
    EntityCrossReferenceStrategy,
    EntryCrossReferenceStrategy,
    EntryPatternScanStrategy,
    StaticTableStrategy,
)
from ..domain.interfaces.catalogs import ProteinCatalog, StructureCatalog
from ..domain.interfaces.resolution_strategy import ResolutionStrategy
from ..domain.models.resolved_identifier import ResolvedIdentifier
from ..errors import CatalogError, UnresolvableIdentifierError

logger = logging.getLogger(__name__)


class IdentifierResolver:
    """
    Drives an ordered chain of resolution strategies.

    Strategies run strictly in sequence and each is attempted exactly once
    per call; the first accession returned wins. A strategy that raises
    CatalogError or exceeds the step timeout counts as a miss. Nothing is
    retried: the chain itself is the fallback mechanism.
    """

    def __init__(
        self,
        strategies: Sequence[ResolutionStrategy],
        step_timeout: Optional[float] = None,
    ):
        """
        Initialize resolver.

        Args:
            strategies: Strategies in the order they should be attempted
            step_timeout: Seconds allowed per strategy; None waits indefinitely
        """
        if not strategies:
            raise ValueError("IdentifierResolver needs at least one strategy")
        self._strategies: List[ResolutionStrategy] = list(strategies)
        self._step_timeout = step_timeout

    @classmethod
    def default(
        cls,
        protein_catalog: ProteinCatalog,
        structure_catalog: StructureCatalog,
        step_timeout: Optional[float] = None,
    ) -> "IdentifierResolver":
        """Build the standard five-step chain over the given catalogs."""
        return cls(
            [
                AccessionFormatStrategy(),
                StaticTableStrategy(),
                AccessionSearchStrategy(protein_catalog),
                EntityCrossReferenceStrategy(structure_catalog),
                EntryCrossReferenceStrategy(structure_catalog),
                EntryPatternScanStrategy(structure_catalog),
            ],
            step_timeout=step_timeout,
        )

    @property
    def strategies(self) -> List[ResolutionStrategy]:
        return list(self._strategies)

    async def resolve(self, identifier: str) -> ResolvedIdentifier:
        """
        Resolve an identifier.

        Args:
            identifier: Structure entry id, accession or free query

        Returns:
            A resolved outcome naming the winning step, or the terminal
            unresolvable outcome once every strategy has missed
        """
        for strategy in self._strategies:
            accession = await self._attempt(strategy, identifier)
            if accession:
                logger.info(
                    f"Resolved {identifier} to {accession} "
                    f"(step {strategy.step}, {strategy.name})"
                )
                return ResolvedIdentifier.resolved(
                    identifier, accession, strategy.step, strategy.name
                )

        logger.info(f"{identifier} is unresolvable; likely a synthetic or non-cataloged entity")
        return ResolvedIdentifier.unresolvable(identifier)

    async def require(self, identifier: str) -> str:
        """
        Resolve an identifier or raise.

        Raises:
            UnresolvableIdentifierError: If every strategy missed
        """
        result = await self.resolve(identifier)
        if not result.is_resolved:
            raise UnresolvableIdentifierError(identifier)
        return result.accession

    async def _attempt(self, strategy: ResolutionStrategy, identifier: str) -> Optional[str]:
        try:
            if self._step_timeout is None:
                accession = await strategy.attempt(identifier)
            else:
                accession = await asyncio.wait_for(
                    strategy.attempt(identifier), timeout=self._step_timeout
                )
        except CatalogError as e:
            logger.debug(f"Step {strategy.step} ({strategy.name}) failed for {identifier}: {e}")
            return None
        except asyncio.TimeoutError:
            logger.debug(f"Step {strategy.step} ({strategy.name}) timed out for {identifier}")
            return None

        if not accession:
            logger.debug(f"Step {strategy.step} ({strategy.name}) had no match for {identifier}")
        return accession
