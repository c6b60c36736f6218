"""Infrastructure implementations of the core catalog and repository interfaces."""

from .repositories.structure_repository import StructureRepository
from .clients import (
    PdbeLigandClient,
    RcsbClient,
    SiftsMappingClient,
    UniProtClient,
)

__all__ = [
    "StructureRepository",
    "PdbeLigandClient",
    "RcsbClient",
    "SiftsMappingClient",
    "UniProtClient",
]
