"""Interfaces for the external catalogs the core talks to.

Every method may raise ``CatalogError``; callers decide whether a failure
is absorbed (resolution, annotation) or fatal (structure text).
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.catalog_records import AccessionMapping, EntryMetadata, ProteinEntry
from ..models.ligand import LigandCandidate


class ProteinCatalog(ABC):
    """Curated protein sequence catalog (accession search and annotations)."""

    @abstractmethod
    async def search_accession(self, query: str) -> Optional[str]:
        """Return the best matching accession for a free query, or None."""
        pass

    @abstractmethod
    async def fetch_entry(self, accession: str) -> ProteinEntry:
        """Fetch function, organism, gene and comment fields for an accession."""
        pass


class StructureCatalog(ABC):
    """Deposited-structure catalog (coordinates, entry metadata, cross-references)."""

    @abstractmethod
    async def fetch_structure_text(self, entry_id: str) -> str:
        """Download the structure file text for an entry."""
        pass

    @abstractmethod
    async def fetch_entry(self, entry_id: str) -> EntryMetadata:
        """Fetch descriptive and provenance fields for an entry."""
        pass

    @abstractmethod
    async def fetch_entry_document(self, entry_id: str) -> str:
        """Fetch the full serialized entry document as text."""
        pass

    @abstractmethod
    async def entity_cross_references(self, entry_id: str) -> List[str]:
        """Accessions listed by the entity-level cross-reference endpoint."""
        pass

    @abstractmethod
    async def entry_cross_references(self, entry_id: str) -> List[str]:
        """Accessions listed by the entry-level cross-reference endpoint."""
        pass


class LigandCatalog(ABC):
    """Ligand metadata keyed by structure entry."""

    @abstractmethod
    async def fetch_ligands(self, entry_id: str) -> List[LigandCandidate]:
        """Ligand metadata for an entry; positions are left at the origin."""
        pass


class MappingCatalog(ABC):
    """Entry-to-accession identifier mappings."""

    @abstractmethod
    async def fetch_accession_mappings(self, entry_id: str) -> List[AccessionMapping]:
        """Accession mappings for an entry, best first."""
        pass
