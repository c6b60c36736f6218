"""Client for the UniProtKB REST API (accession search and entry annotations)."""

import logging
from typing import Optional

import httpx

from ...config import ClientConfig
from ...core.domain.interfaces.catalogs import ProteinCatalog
from ...core.domain.models.catalog_records import ProteinEntry
from .base import CatalogClient
from .schemas import UniProtEntry, UniProtSearchResults

logger = logging.getLogger(__name__)


class UniProtClient(CatalogClient, ProteinCatalog):
    """Protein catalog backed by ``rest.uniprot.org``."""

    def __init__(
        self, config: Optional[ClientConfig] = None, client: Optional[httpx.AsyncClient] = None
    ):
        config = config or ClientConfig()
        super().__init__(config.uniprot_base_url, config, client)

    async def search_accession(self, query: str) -> Optional[str]:
        """
        Search UniProtKB and return the best hit's accession.

        Args:
            query: Query string in UniProt query syntax

        Returns:
            Primary accession of the first result, or None when nothing matched
        """
        data = await self._get_json(
            "/uniprotkb/search",
            params={"query": query, "format": "json", "size": 1, "fields": "accession"},
        )
        results = self._validate(UniProtSearchResults, data, f"UniProt search {query!r}").results
        if not results:
            logger.debug(f"UniProt search for {query!r} returned no results")
            return None
        return results[0].primary_accession

    async def fetch_entry(self, accession: str) -> ProteinEntry:
        data = await self._get_json(f"/uniprotkb/{accession}.json")
        entry = self._validate(UniProtEntry, data, f"UniProt entry {accession}")
        return entry.to_domain()
