"""Records returned by the external catalogs, independent of wire format."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .annotation import AnnotationEntry, CrossReference


@dataclass(frozen=True)
class ProteinEntry:
    """Function, organism, gene and cross-reference fields for one accession."""

    accession: str
    recommended_name: Optional[str] = None
    gene: Optional[str] = None
    organism: Optional[str] = None
    function_texts: Tuple[str, ...] = ()
    go_terms: Tuple[str, ...] = ()
    pathways: Tuple[str, ...] = ()
    annotations: Tuple[AnnotationEntry, ...] = ()
    disease_cross_references: Tuple[CrossReference, ...] = ()


@dataclass(frozen=True)
class EntryMetadata:
    """Descriptive and provenance fields of one deposited structure entry."""

    entry_id: str
    title: Optional[str] = None
    descriptor: Optional[str] = None
    experimental_method: Optional[str] = None
    resolution: Optional[float] = None
    keywords: Optional[str] = None
    journal: Optional[str] = None


@dataclass(frozen=True)
class AccessionMapping:
    """One entry-to-accession mapping with the catalog's aggregated name."""

    accession: str
    name: Optional[str] = None
