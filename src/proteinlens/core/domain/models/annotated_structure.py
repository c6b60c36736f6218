#!/usr/bin/env python3
# src/proteinlens/core/domain/models/annotated_structure.py

"""
Domain models for the merged structure + annotation record.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from .catalog_records import EntryMetadata
from .disease_association import DiseaseAssociation, DiseaseAssociationSummary
from .ligand import LigandCandidate, LigandGroup
from .pocket import PocketCandidate
from .resolved_identifier import ResolvedIdentifier
from .structural_model import StructuralModel
from .structure_statistics import SecondaryStructureStats


class AnnotationSource(Enum):
    """Where a merged field value came from."""

    PROTEIN_CATALOG = "protein-catalog"
    ENTRY_METADATA = "entry-metadata"
    IDENTIFIER_MAPPING = "identifier-mapping"
    STRUCTURE = "structure"
    PLACEHOLDER = "placeholder"


class DiseaseStatus(Enum):
    """State of the disease section of a merged record."""

    AVAILABLE = "available"
    UNRESOLVABLE = "unresolvable"
    NOT_APPLICABLE = "not-applicable"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class ProvenancedValue:
    """A field value tagged with the source that supplied it."""

    value: str
    source: AnnotationSource

    @property
    def is_placeholder(self) -> bool:
        return self.source is AnnotationSource.PLACEHOLDER

    @classmethod
    def placeholder(cls, value: str) -> "ProvenancedValue":
        return cls(value=value, source=AnnotationSource.PLACEHOLDER)


@dataclass(frozen=True)
class StructureAnalysis:
    """Everything GeometricAnalyzer derives from one model."""

    ligand_groups: Tuple[LigandGroup, ...]
    ligands: Tuple[LigandCandidate, ...]
    pockets: Tuple[PocketCandidate, ...]
    secondary_structure: SecondaryStructureStats


@dataclass(frozen=True)
class AnnotatedStructure:
    """Merged record handed to the presentation layer.

    Consumers must tolerate placeholder-tagged fields: ``placeholders`` names
    every field that was synthesized locally because its source failed, and
    ``stage_errors`` records why.
    """

    entry_id: str
    model: StructuralModel
    analysis: StructureAnalysis
    resolution: ResolvedIdentifier
    description: ProvenancedValue
    function: ProvenancedValue
    gene: ProvenancedValue
    organism: ProvenancedValue
    go_terms: Tuple[str, ...] = ()
    pathways: Tuple[str, ...] = ()
    diseases: Tuple[DiseaseAssociation, ...] = ()
    disease_summary: Optional[DiseaseAssociationSummary] = None
    entry_metadata: Optional[EntryMetadata] = None
    disease_status: DiseaseStatus = DiseaseStatus.PLACEHOLDER
    placeholders: FrozenSet[str] = frozenset()
    stage_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_partial(self) -> bool:
        return bool(self.placeholders)

    @property
    def ligands(self) -> Tuple[LigandCandidate, ...]:
        return self.analysis.ligands

    @property
    def pockets(self) -> Tuple[PocketCandidate, ...]:
        return self.analysis.pockets
