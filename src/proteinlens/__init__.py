"""Structure ingestion, identifier resolution and annotation aggregation."""

from .config import AggregatorConfig, AnalyzerConfig, ClientConfig, ParserConfig
from .core.errors import (
    CatalogError,
    StructureNotAvailableError,
    StructureParseError,
    UnresolvableIdentifierError,
)

__version__ = "0.1.0"

__all__ = [
    "AggregatorConfig",
    "AnalyzerConfig",
    "ClientConfig",
    "ParserConfig",
    "CatalogError",
    "StructureNotAvailableError",
    "StructureParseError",
    "UnresolvableIdentifierError",
]
