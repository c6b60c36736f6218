#!/usr/bin/env python3
# src/proteinlens/core/services/annotation_aggregator.py

"""
Service merging a structure with best-effort annotations from several catalogs.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Dict, List, Optional, Set, TypeVar

from ...config import AggregatorConfig
from ..domain.interfaces.catalogs import (
    LigandCatalog,
    MappingCatalog,
    ProteinCatalog,
    StructureCatalog,
)
from ..domain.models.annotated_structure import (
    AnnotatedStructure,
    AnnotationSource,
    DiseaseStatus,
    ProvenancedValue,
)
from ..domain.models.catalog_records import EntryMetadata, ProteinEntry
from ..domain.models.disease_association import DiseaseAssociation, DiseaseAssociationSummary
from ..domain.models.resolved_identifier import ResolvedIdentifier
from ..domain.models.structural_model import StructuralModel
from ..errors import CatalogError, StructureNotAvailableError, StructureParseError
from ..interfaces.repository import Repository
from .disease_association_extractor import DiseaseAssociationExtractor
from .geometric_analyzer import GeometricAnalyzer
from .identifier_resolver import IdentifierResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Accessions of plant proteins, which are not screened for human disease
PLANT_ACCESSIONS = frozenset(["B6T563"])
TITLE_PREFIXES = re.compile(
    r"^\s*(CRYSTAL STRUCTURE OF|X-RAY STRUCTURE OF|NMR STRUCTURE OF)\s+", re.IGNORECASE
)

UNKNOWN_FUNCTION = "Function not available"
UNKNOWN_GENE = "Unknown"
UNKNOWN_ORGANISM = "Unknown organism"

STAGE_STRUCTURE = "structure"
STAGE_ENTRY = "entry-metadata"
STAGE_LIGANDS = "ligand-metadata"
STAGE_MAPPING = "identifier-mapping"
STAGE_PROTEIN = "protein-annotation"


def clean_title(title: Optional[str]) -> Optional[str]:
    """Strip experimental prefixes such as ``CRYSTAL STRUCTURE OF`` from an entry title."""
    if not title:
        return None
    cleaned = TITLE_PREFIXES.sub("", title).strip()
    return cleaned or None


@dataclass
class _ProteinStageResult:
    """Outcome of the dependent mapping -> resolution -> annotation chain."""

    resolution: ResolvedIdentifier
    mapping_name: Optional[str] = None
    entry: Optional[ProteinEntry] = None


class AnnotationAggregator:
    """
    Orchestrates structure retrieval, identifier resolution and annotation.

    The structure is mandatory: failing to obtain or parse it raises
    StructureNotAvailableError. Every other stage is attempted once and a
    failure (CatalogError or timeout) degrades to a placeholder recorded in
    ``placeholders`` and ``stage_errors``. Independent stages run
    concurrently; a failed stage never cancels its siblings.
    """

    def __init__(
        self,
        structures: Repository[StructuralModel],
        protein_catalog: ProteinCatalog,
        structure_catalog: StructureCatalog,
        ligand_catalog: LigandCatalog,
        mapping_catalog: MappingCatalog,
        resolver: Optional[IdentifierResolver] = None,
        extractor: Optional[DiseaseAssociationExtractor] = None,
        analyzer: Optional[GeometricAnalyzer] = None,
        config: Optional[AggregatorConfig] = None,
    ):
        self._structures = structures
        self._protein_catalog = protein_catalog
        self._structure_catalog = structure_catalog
        self._ligand_catalog = ligand_catalog
        self._mapping_catalog = mapping_catalog
        self._config = config or AggregatorConfig()
        self._resolver = resolver or IdentifierResolver.default(
            protein_catalog, structure_catalog, step_timeout=self._config.step_timeout
        )
        self._extractor = extractor or DiseaseAssociationExtractor()
        self._analyzer = analyzer or GeometricAnalyzer()

    async def annotate(self, entry_id: str) -> AnnotatedStructure:
        """
        Build the merged record for one structure entry.

        Args:
            entry_id: Structure entry identifier

        Returns:
            AnnotatedStructure, possibly partial

        Raises:
            StructureNotAvailableError: If the structure itself cannot be obtained
        """
        entry_id = entry_id.strip().upper()
        model = await self._load_structure(entry_id)

        errors: Dict[str, str] = {}
        metadata, ligand_metadata, protein = await asyncio.gather(
            self._run_stage(STAGE_ENTRY, self._structure_catalog.fetch_entry(entry_id), errors),
            self._run_stage(STAGE_LIGANDS, self._ligand_catalog.fetch_ligands(entry_id), errors),
            self._protein_stage(entry_id, errors),
        )

        analysis = self._analyzer.analyze(model, ligand_metadata or ())
        return self._merge(entry_id, model, analysis, metadata, protein, errors)

    async def _load_structure(self, entry_id: str) -> StructuralModel:
        try:
            model = await self._with_timeout(self._structures.get(entry_id))
        except asyncio.TimeoutError:
            raise StructureNotAvailableError(entry_id, "structure fetch timed out") from None
        except CatalogError as e:
            raise StructureNotAvailableError(entry_id, str(e)) from e
        except StructureParseError as e:
            raise StructureNotAvailableError(entry_id, f"malformed structure, {e}") from e
        if model is None:
            raise StructureNotAvailableError(entry_id)
        return model

    async def _protein_stage(self, entry_id: str, errors: Dict[str, str]) -> _ProteinStageResult:
        """Mapping, then resolver fallback, then the annotation fetch; strictly in order."""
        mappings = await self._run_stage(
            STAGE_MAPPING, self._mapping_catalog.fetch_accession_mappings(entry_id), errors
        )
        mapping = mappings[0] if mappings else None

        if mapping is not None:
            resolution = ResolvedIdentifier.resolved(
                entry_id, mapping.accession, None, STAGE_MAPPING
            )
        else:
            resolution = await self._resolver.resolve(entry_id)

        result = _ProteinStageResult(
            resolution=resolution, mapping_name=mapping.name if mapping else None
        )
        if resolution.is_resolved:
            result.entry = await self._run_stage(
                STAGE_PROTEIN, self._protein_catalog.fetch_entry(resolution.accession), errors
            )
        return result

    async def _run_stage(
        self, name: str, awaitable: Awaitable[T], errors: Dict[str, str]
    ) -> Optional[T]:
        try:
            return await self._with_timeout(awaitable)
        except asyncio.TimeoutError:
            logger.warning(f"Stage {name} timed out after {self._config.step_timeout}s")
            errors[name] = "timed out"
        except CatalogError as e:
            logger.warning(f"Stage {name} failed: {e}")
            errors[name] = str(e)
        return None

    async def _with_timeout(self, awaitable: Awaitable[T]) -> T:
        if self._config.step_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._config.step_timeout)

    def _merge(
        self,
        entry_id: str,
        model: StructuralModel,
        analysis,
        metadata: Optional[EntryMetadata],
        protein: _ProteinStageResult,
        errors: Dict[str, str],
    ) -> AnnotatedStructure:
        entry = protein.entry
        placeholders: Set[str] = set()

        description = self._first_available(
            [
                (entry.recommended_name if entry else None, AnnotationSource.PROTEIN_CATALOG),
                (
                    (metadata.descriptor or clean_title(metadata.title)) if metadata else None,
                    AnnotationSource.ENTRY_METADATA,
                ),
                (protein.mapping_name, AnnotationSource.IDENTIFIER_MAPPING),
            ],
            f"Protein {entry_id}",
        )
        function = self._first_available(
            [
                (entry.function_texts[0] if entry and entry.function_texts else None,
                 AnnotationSource.PROTEIN_CATALOG),
                (entry.recommended_name if entry else None, AnnotationSource.PROTEIN_CATALOG),
            ],
            UNKNOWN_FUNCTION,
        )
        gene = self._first_available(
            [(entry.gene if entry else None, AnnotationSource.PROTEIN_CATALOG)], UNKNOWN_GENE
        )
        organism = self._first_available(
            [(entry.organism if entry else None, AnnotationSource.PROTEIN_CATALOG)],
            UNKNOWN_ORGANISM,
        )
        for field_name, value in (
            ("description", description),
            ("function", function),
            ("gene", gene),
            ("organism", organism),
        ):
            if value.is_placeholder:
                placeholders.add(field_name)

        diseases: List[DiseaseAssociation] = []
        accession = protein.resolution.accession
        if accession is None:
            status = DiseaseStatus.UNRESOLVABLE
        elif accession in PLANT_ACCESSIONS:
            status = DiseaseStatus.NOT_APPLICABLE
        elif entry is None:
            status = DiseaseStatus.PLACEHOLDER
            placeholders.add("diseases")
        else:
            status = DiseaseStatus.AVAILABLE
            diseases = self._extractor.extract(entry.annotations, entry.disease_cross_references)

        if STAGE_LIGANDS in errors:
            placeholders.add("ligands")

        if placeholders:
            logger.info(f"Annotation for {entry_id} is partial: {', '.join(sorted(placeholders))}")

        return AnnotatedStructure(
            entry_id=entry_id,
            model=model,
            analysis=analysis,
            resolution=protein.resolution,
            description=description,
            function=function,
            gene=gene,
            organism=organism,
            go_terms=entry.go_terms if entry else (),
            pathways=entry.pathways if entry else (),
            diseases=tuple(diseases),
            disease_summary=(
                DiseaseAssociationSummary.from_associations(diseases)
                if status is DiseaseStatus.AVAILABLE
                else None
            ),
            entry_metadata=metadata,
            disease_status=status,
            placeholders=frozenset(placeholders),
            stage_errors=dict(errors),
        )

    @staticmethod
    def _first_available(candidates, fallback: str) -> ProvenancedValue:
        """First non-empty candidate in precedence order, else a placeholder."""
        for value, source in candidates:
            if value:
                return ProvenancedValue(value=value, source=source)
        return ProvenancedValue.placeholder(fallback)
