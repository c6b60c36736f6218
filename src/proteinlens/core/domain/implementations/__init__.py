"""Concrete identifier resolution strategies, in fallback order."""

from .accession_format_strategy import AccessionFormatStrategy, is_accession
from .static_table_strategy import KNOWN_ACCESSIONS, StaticTableStrategy
from .accession_search_strategy import AccessionSearchStrategy, is_entry_id
from .cross_reference_strategies import (
    EntityCrossReferenceStrategy,
    EntryCrossReferenceStrategy,
)
from .entry_scan_strategy import (
    EntryPatternScanStrategy,
    is_plausible_accession,
    scan_accessions,
)

__all__ = [
    "AccessionFormatStrategy",
    "StaticTableStrategy",
    "AccessionSearchStrategy",
    "EntityCrossReferenceStrategy",
    "EntryCrossReferenceStrategy",
    "EntryPatternScanStrategy",
    "KNOWN_ACCESSIONS",
    "is_accession",
    "is_entry_id",
    "is_plausible_accession",
    "scan_accessions",
]
