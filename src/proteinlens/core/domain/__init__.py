"""Core domain models, interfaces and resolution strategies."""

from .models.structural_model import StructuralModel
from .models.resolved_identifier import ResolvedIdentifier
from .models.annotated_structure import AnnotatedStructure
from .interfaces.resolution_strategy import ResolutionStrategy

__all__ = [
    "StructuralModel",
    "ResolvedIdentifier",
    "AnnotatedStructure",
    "ResolutionStrategy",
]
