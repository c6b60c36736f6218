#!/usr/bin/env python3
# src/proteinlens/core/domain/models/disease_association.py

"""
Domain models for disease associations mined from protein annotations.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Optional, Sequence, Tuple


class EvidenceLevel(IntEnum):
    """Confidence class of an association; lower values sort first."""

    KNOWN = 0
    PREDICTED = 1
    INFERRED = 2
    UNCERTAIN = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class AssociationType(Enum):
    DIRECT = "Direct"
    INDIRECT = "Indirect"
    FUNCTIONAL = "Functional"


@dataclass(frozen=True)
class Reference:
    """A literature or database reference backing an association."""

    id: str
    title: str
    authors: Optional[str] = None
    journal: Optional[str] = None
    year: Optional[int] = None
    pmid: Optional[str] = None
    doi: Optional[str] = None

    @property
    def display_title(self) -> str:
        if self.year is not None:
            return f"{self.title} ({self.year})"
        return self.title


@dataclass(frozen=True)
class DiseaseAssociation:
    """A scored claim linking a protein to a disease."""

    id: str
    disease_name: str
    disease_id: Optional[str]
    disease_type: Optional[str]
    evidence_level: EvidenceLevel
    association_score: float
    association_type: AssociationType
    clinical_features: Tuple[str, ...] = ()
    references: Tuple[Reference, ...] = ()
    data_source: str = "UniProt"
    last_updated: Optional[str] = None
    gene_role: Optional[str] = None

    @property
    def sort_key(self) -> Tuple[int, float]:
        """Evidence level ascending, then score descending."""
        return (int(self.evidence_level), -self.association_score)


@dataclass(frozen=True)
class DiseaseAssociationSummary:
    """Aggregate counts over a ranked list of associations."""

    total_diseases: int
    known_diseases: int
    predicted_diseases: int
    top_diseases: Tuple[DiseaseAssociation, ...] = ()
    categories: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_associations(
        cls, associations: Sequence[DiseaseAssociation], top_n: int = 5
    ) -> "DiseaseAssociationSummary":
        """
        Summarize associations that are already ranked.

        Args:
            associations: Ranked associations
            top_n: Number of leading associations to keep

        Returns:
            DiseaseAssociationSummary instance
        """
        categories = Counter(a.disease_type or "Unknown" for a in associations)
        return cls(
            total_diseases=len(associations),
            known_diseases=sum(
                1 for a in associations if a.evidence_level is EvidenceLevel.KNOWN
            ),
            predicted_diseases=sum(
                1 for a in associations if a.evidence_level is EvidenceLevel.PREDICTED
            ),
            top_diseases=tuple(associations[:top_n]),
            categories=dict(categories),
        )
