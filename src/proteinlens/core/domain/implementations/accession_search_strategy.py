"""Step 3: primary search-by-identifier against the protein catalog."""

import re
from typing import Optional

from ..interfaces.catalogs import ProteinCatalog
from ..interfaces.resolution_strategy import ResolutionStrategy

ENTRY_ID_PATTERN = re.compile(r"^[0-9][A-Z0-9]{3}$")


def is_entry_id(identifier: str) -> bool:
    """True for four-character structure entry identifiers such as ``1A4U``."""
    return ENTRY_ID_PATTERN.match(identifier.upper()) is not None


class AccessionSearchStrategy(ResolutionStrategy):
    """Ask the protein catalog for its best match."""

    name = "accession-search"
    step = 3

    def __init__(self, catalog: ProteinCatalog):
        self._catalog = catalog

    async def attempt(self, identifier: str) -> Optional[str]:
        query = identifier.strip()
        if is_entry_id(query):
            # Restrict the search to entries cross-referencing this structure
            query = f"xref:pdb-{query.upper()}"
        return await self._catalog.search_accession(query)
