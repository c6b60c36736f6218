"""HTTP clients for the external catalogs."""

from .base import CatalogClient
from .uniprot_client import UniProtClient
from .rcsb_client import RcsbClient
from .pdbe_client import PdbeLigandClient, SiftsMappingClient

__all__ = [
    "CatalogClient",
    "UniProtClient",
    "RcsbClient",
    "PdbeLigandClient",
    "SiftsMappingClient",
]
