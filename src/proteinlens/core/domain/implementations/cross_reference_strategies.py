"""Step 4: cross-reference lookups on the structure catalog.

Both lookups share one step number; the entity-level endpoint is tried
before the entry-level one.
"""

from typing import List, Optional

from ..interfaces.catalogs import StructureCatalog
from ..interfaces.resolution_strategy import ResolutionStrategy
from .accession_format_strategy import is_accession


def first_accession(candidates: List[str]) -> Optional[str]:
    for candidate in candidates:
        if candidate and is_accession(candidate.strip()):
            return candidate.strip()
    return None


class EntityCrossReferenceStrategy(ResolutionStrategy):
    name = "entity-cross-reference"
    step = 4

    def __init__(self, catalog: StructureCatalog):
        self._catalog = catalog

    async def attempt(self, identifier: str) -> Optional[str]:
        references = await self._catalog.entity_cross_references(identifier.strip().upper())
        return first_accession(references)


class EntryCrossReferenceStrategy(ResolutionStrategy):
    name = "entry-cross-reference"
    step = 4

    def __init__(self, catalog: StructureCatalog):
        self._catalog = catalog

    async def attempt(self, identifier: str) -> Optional[str]:
        references = await self._catalog.entry_cross_references(identifier.strip().upper())
        return first_accession(references)
