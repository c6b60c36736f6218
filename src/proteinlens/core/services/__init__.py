"""Core services: parsing, geometric analysis, resolution and annotation."""

from .structure_parser import StructureParser
from .geometric_analyzer import GeometricAnalyzer
from .identifier_resolver import IdentifierResolver
from .disease_association_extractor import DiseaseAssociationExtractor
from .annotation_aggregator import AnnotationAggregator

__all__ = [
    "StructureParser",
    "GeometricAnalyzer",
    "IdentifierResolver",
    "DiseaseAssociationExtractor",
    "AnnotationAggregator",
]
