"""Client for RCSB PDB: coordinate downloads, entry documents and cross-references."""

import json
import logging
from typing import List, Optional

import httpx

from ...config import ClientConfig
from ...core.domain.interfaces.catalogs import StructureCatalog
from ...core.domain.models.catalog_records import EntryMetadata
from ...core.errors import CatalogError
from .base import CatalogClient
from .schemas import RcsbEntry, RcsbPolymerEntity

logger = logging.getLogger(__name__)


class RcsbClient(CatalogClient, StructureCatalog):
    """Structure catalog backed by ``data.rcsb.org`` and ``files.rcsb.org``."""

    def __init__(
        self, config: Optional[ClientConfig] = None, client: Optional[httpx.AsyncClient] = None
    ):
        config = config or ClientConfig()
        super().__init__(config.rcsb_data_url, config, client)
        self._files_url = config.rcsb_files_url.rstrip("/")

    async def fetch_structure_text(self, entry_id: str) -> str:
        text = await self._get_text(f"{self._files_url}/{entry_id.upper()}.pdb")
        if not text.strip():
            raise CatalogError(f"Empty structure file for {entry_id}")
        return text

    async def fetch_entry(self, entry_id: str) -> EntryMetadata:
        data = await self._get_json(f"/entry/{entry_id.upper()}")
        return self._validate(RcsbEntry, data, f"RCSB entry {entry_id}").to_domain(entry_id.upper())

    async def fetch_entry_document(self, entry_id: str) -> str:
        """Serialized entry document, re-encoded so the text is stable for scanning."""
        data = await self._get_json(f"/entry/{entry_id.upper()}")
        return json.dumps(data)

    async def entity_cross_references(self, entry_id: str) -> List[str]:
        """Accessions of the first polymer entity."""
        data = await self._get_json(f"/polymer_entity/{entry_id.upper()}/1")
        entity = self._validate(RcsbPolymerEntity, data, f"RCSB polymer entity {entry_id}")
        return entity.uniprot_accessions()

    async def entry_cross_references(self, entry_id: str) -> List[str]:
        data = await self._get_json(f"/entry/{entry_id.upper()}")
        return self._validate(RcsbEntry, data, f"RCSB entry {entry_id}").uniprot_accessions()
