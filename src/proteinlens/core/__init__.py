"""Core domain models, interfaces and services for structure ingestion and annotation."""

from .domain.models.structural_model import StructuralModel
from .domain.models.resolved_identifier import ResolvedIdentifier
from .domain.models.annotated_structure import AnnotatedStructure
from .domain.interfaces.resolution_strategy import ResolutionStrategy
from .services.structure_parser import StructureParser
from .services.geometric_analyzer import GeometricAnalyzer
from .services.identifier_resolver import IdentifierResolver
from .services.disease_association_extractor import DiseaseAssociationExtractor
from .services.annotation_aggregator import AnnotationAggregator

__all__ = [
    "StructuralModel",
    "ResolvedIdentifier",
    "AnnotatedStructure",
    "ResolutionStrategy",
    "StructureParser",
    "GeometricAnalyzer",
    "IdentifierResolver",
    "DiseaseAssociationExtractor",
    "AnnotationAggregator",
]
