"""Abstract collaborators of the core services."""

from .resolution_strategy import ResolutionStrategy
from .catalogs import LigandCatalog, MappingCatalog, ProteinCatalog, StructureCatalog

__all__ = [
    "ResolutionStrategy",
    "LigandCatalog",
    "MappingCatalog",
    "ProteinCatalog",
    "StructureCatalog",
]
