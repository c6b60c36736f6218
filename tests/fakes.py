"""In-memory stand-ins for the external catalogs."""

import asyncio
from typing import Dict, List, Optional

from proteinlens.core.domain.interfaces.catalogs import (
    LigandCatalog,
    MappingCatalog,
    ProteinCatalog,
    StructureCatalog,
)
from proteinlens.core.domain.models.catalog_records import (
    AccessionMapping,
    EntryMetadata,
    ProteinEntry,
)
from proteinlens.core.domain.models.ligand import LigandCandidate
from proteinlens.core.errors import CatalogError


class _Recorder:
    """Records every call and raises CatalogError for methods listed in ``failing``."""

    def __init__(self, failing=(), delay: float = 0.0):
        self.calls: List[tuple] = []
        self.failing = set(failing)
        self.delay = delay

    async def _enter(self, method: str, *args):
        self.calls.append((method,) + args)
        if self.delay:
            await asyncio.sleep(self.delay)
        if method in self.failing:
            raise CatalogError(f"{method} unavailable", status_code=503)

    @property
    def call_count(self) -> int:
        return len(self.calls)


class FakeProteinCatalog(_Recorder, ProteinCatalog):
    def __init__(
        self,
        search_results: Optional[Dict[str, str]] = None,
        entries: Optional[Dict[str, ProteinEntry]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.search_results = search_results or {}
        self.entries = entries or {}

    async def search_accession(self, query: str) -> Optional[str]:
        await self._enter("search_accession", query)
        return self.search_results.get(query)

    async def fetch_entry(self, accession: str) -> ProteinEntry:
        await self._enter("fetch_entry", accession)
        if accession not in self.entries:
            raise CatalogError(f"No entry {accession}", status_code=404)
        return self.entries[accession]


class FakeStructureCatalog(_Recorder, StructureCatalog):
    def __init__(
        self,
        structures: Optional[Dict[str, str]] = None,
        entries: Optional[Dict[str, EntryMetadata]] = None,
        documents: Optional[Dict[str, str]] = None,
        entity_refs: Optional[Dict[str, List[str]]] = None,
        entry_refs: Optional[Dict[str, List[str]]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.structures = structures or {}
        self.entries = entries or {}
        self.documents = documents or {}
        self.entity_refs = entity_refs or {}
        self.entry_refs = entry_refs or {}

    @staticmethod
    def _lookup(table, key, what):
        if key not in table:
            raise CatalogError(f"No {what} for {key}", status_code=404)
        return table[key]

    async def fetch_structure_text(self, entry_id: str) -> str:
        await self._enter("fetch_structure_text", entry_id)
        return self._lookup(self.structures, entry_id, "structure")

    async def fetch_entry(self, entry_id: str) -> EntryMetadata:
        await self._enter("fetch_entry", entry_id)
        return self._lookup(self.entries, entry_id, "entry")

    async def fetch_entry_document(self, entry_id: str) -> str:
        await self._enter("fetch_entry_document", entry_id)
        return self._lookup(self.documents, entry_id, "document")

    async def entity_cross_references(self, entry_id: str) -> List[str]:
        await self._enter("entity_cross_references", entry_id)
        return self._lookup(self.entity_refs, entry_id, "entity")

    async def entry_cross_references(self, entry_id: str) -> List[str]:
        await self._enter("entry_cross_references", entry_id)
        return self._lookup(self.entry_refs, entry_id, "entry references")


class FakeLigandCatalog(_Recorder, LigandCatalog):
    def __init__(self, ligands: Optional[Dict[str, List[LigandCandidate]]] = None, **kwargs):
        super().__init__(**kwargs)
        self.ligands = ligands or {}

    async def fetch_ligands(self, entry_id: str) -> List[LigandCandidate]:
        await self._enter("fetch_ligands", entry_id)
        return list(self.ligands.get(entry_id, []))


class FakeMappingCatalog(_Recorder, MappingCatalog):
    def __init__(self, mappings: Optional[Dict[str, List[AccessionMapping]]] = None, **kwargs):
        super().__init__(**kwargs)
        self.mappings = mappings or {}

    async def fetch_accession_mappings(self, entry_id: str) -> List[AccessionMapping]:
        await self._enter("fetch_accession_mappings", entry_id)
        return list(self.mappings.get(entry_id, []))
