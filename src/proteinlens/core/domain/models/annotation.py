"""Free-text annotation entries attached to a protein accession."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class AnnotationCategory(Enum):
    """Categories of annotation text that can carry disease signals."""

    DISEASE = "disease"
    FUNCTION = "function"
    MISCELLANEOUS = "miscellaneous"
    POLYMORPHISM = "polymorphism"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["AnnotationCategory"]:
        """Map a catalog comment type (any case) to a category, or None."""
        if not label:
            return None
        try:
            return cls(label.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class CrossReference:
    database: str
    id: str
    name: Optional[str] = None


@dataclass(frozen=True)
class EvidenceCode:
    code: str
    source: Optional[str] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class StructuredDisease:
    """Curated disease sub-record carried by a disease annotation."""

    name: str
    accession: Optional[str] = None
    acronym: Optional[str] = None
    description: Optional[str] = None
    cross_reference: Optional[CrossReference] = None
    evidences: Tuple[EvidenceCode, ...] = ()


@dataclass(frozen=True)
class AnnotationEntry:
    """One annotation comment: free text, a structured disease, or both."""

    category: AnnotationCategory
    texts: Tuple[str, ...] = ()
    disease: Optional[StructuredDisease] = None
    note_texts: Tuple[str, ...] = ()
