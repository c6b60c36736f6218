"""Clients for the PDBe REST API: ligand monomers and SIFTS accession mappings."""

import logging
from typing import Any, List, Optional

import httpx

from ...config import ClientConfig
from ...core.domain.interfaces.catalogs import LigandCatalog, MappingCatalog
from ...core.domain.models.catalog_records import AccessionMapping
from ...core.domain.models.ligand import LigandCandidate
from ...core.errors import CatalogError
from .base import CatalogClient
from .schemas import LigandListing, SiftsEntry

logger = logging.getLogger(__name__)


def _entry_payload(data: Any, entry_id: str) -> Any:
    """PDBe wraps every response in an object keyed by the lower-case entry id."""
    if not isinstance(data, dict):
        raise CatalogError(f"Unexpected PDBe response for {entry_id}")
    return data.get(entry_id.lower())


class PdbeLigandClient(CatalogClient, LigandCatalog):
    """Ligand metadata from ``/pdb/entry/ligand_monomers``."""

    def __init__(
        self, config: Optional[ClientConfig] = None, client: Optional[httpx.AsyncClient] = None
    ):
        config = config or ClientConfig()
        super().__init__(config.pdbe_api_url, config, client)

    async def fetch_ligands(self, entry_id: str) -> List[LigandCandidate]:
        """
        Fetch ligand metadata for an entry.

        Returns:
            One candidate per monomer row, positioned at the origin; weights in kDa
        """
        data = await self._get_json(f"/pdb/entry/ligand_monomers/{entry_id.lower()}")
        listing = self._validate(
            LigandListing, _entry_payload(data, entry_id), f"PDBe ligands {entry_id}"
        )
        return [row.to_domain() for row in listing.ligand_monomers]


class SiftsMappingClient(CatalogClient, MappingCatalog):
    """Entry-to-UniProt mappings from ``/mappings/uniprot``."""

    def __init__(
        self, config: Optional[ClientConfig] = None, client: Optional[httpx.AsyncClient] = None
    ):
        config = config or ClientConfig()
        super().__init__(config.pdbe_api_url, config, client)

    async def fetch_accession_mappings(self, entry_id: str) -> List[AccessionMapping]:
        data = await self._get_json(f"/mappings/uniprot/{entry_id.lower()}")
        entry = self._validate(SiftsEntry, _entry_payload(data, entry_id), f"SIFTS {entry_id}")
        mappings = [
            AccessionMapping(accession=accession, name=details.name if details else None)
            for accession, details in entry.uniprot.items()
        ]
        logger.debug(f"SIFTS lists {len(mappings)} accessions for {entry_id}")
        return mappings
