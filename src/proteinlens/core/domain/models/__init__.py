"""Domain model classes."""

from .atom import AtomRecord, SecondaryStructure
from .bond import Bond
from .structure_header import StructureHeader
from .structural_model import StructuralModel
from .ligand import LigandCandidate, LigandGroup
from .pocket import Druggability, PocketCandidate
from .structure_statistics import SecondaryStructureStats
from .disease_association import (
    AssociationType,
    DiseaseAssociation,
    DiseaseAssociationSummary,
    EvidenceLevel,
    Reference,
)
from .annotation import (
    AnnotationCategory,
    AnnotationEntry,
    CrossReference,
    EvidenceCode,
    StructuredDisease,
)
from .catalog_records import AccessionMapping, EntryMetadata, ProteinEntry
from .resolved_identifier import ResolvedIdentifier
from .annotated_structure import (
    AnnotatedStructure,
    AnnotationSource,
    DiseaseStatus,
    ProvenancedValue,
    StructureAnalysis,
)

__all__ = [
    "AtomRecord",
    "SecondaryStructure",
    "Bond",
    "StructureHeader",
    "StructuralModel",
    "LigandCandidate",
    "LigandGroup",
    "Druggability",
    "PocketCandidate",
    "SecondaryStructureStats",
    "AssociationType",
    "DiseaseAssociation",
    "DiseaseAssociationSummary",
    "EvidenceLevel",
    "Reference",
    "AnnotationCategory",
    "AnnotationEntry",
    "CrossReference",
    "EvidenceCode",
    "StructuredDisease",
    "AccessionMapping",
    "EntryMetadata",
    "ProteinEntry",
    "ResolvedIdentifier",
    "AnnotatedStructure",
    "AnnotationSource",
    "DiseaseStatus",
    "ProvenancedValue",
    "StructureAnalysis",
]
