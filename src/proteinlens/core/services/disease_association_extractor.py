#!/usr/bin/env python3
# src/proteinlens/core/services/disease_association_extractor.py

"""
Service mining annotation entries for disease-relevance signals.
"""

import logging
import re
import uuid
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..domain.models.annotation import (
    AnnotationCategory,
    AnnotationEntry,
    CrossReference,
    StructuredDisease,
)
from ..domain.models.disease_association import (
    AssociationType,
    DiseaseAssociation,
    EvidenceLevel,
    Reference,
)

logger = logging.getLogger(__name__)

DISEASE_ID_PATTERNS = (
    re.compile(r"OMIM:[0-9]+"),
    re.compile(r"Orphanet:[0-9]+"),
    re.compile(r"MIM:[0-9]+"),
)
SPECIFIC_PATHOGEN_KEYWORDS = ("sars-cov-2", "covid-19")
GENERIC_PATHOGEN_KEYWORDS = ("coronavirus",)
DISEASE_KEYWORDS = ("disease", "syndrome", "disorder", "pathology")

# First matching keyword picks the label; the trailing entry is the fallback
MISCELLANEOUS_LABELS: Tuple[Tuple[Optional[str], str], ...] = (
    ("disease", "Disease"),
    ("syndrome", "Syndrome"),
    ("disorder", "Disorder"),
    (None, "Unknown Disease"),
)
POLYMORPHISM_LABELS: Tuple[Tuple[Optional[str], str], ...] = (
    ("disease", "Genetic Disease"),
    ("syndrome", "Genetic Syndrome"),
    (None, "Genetic Disorder"),
)

CROSS_REFERENCE_SOURCES = {"OMIM": "OMIM", "ORPHA": "Orphanet"}

COVID_REFERENCE = Reference(
    id="covid19-ref1",
    title="COVID-19: A novel coronavirus disease",
    authors="WHO",
    journal="World Health Organization",
    year=2020,
    pmid="32031570",
    doi="10.1016/S0140-6736(20)30183-5",
)


def _default_id_factory(prefix: str) -> str:
    suffix = uuid.uuid4().hex[:8]
    return f"{prefix}-{suffix}" if prefix else suffix


def _default_clock() -> str:
    return date.today().isoformat()


def extract_disease_id(text: str) -> Optional[str]:
    """First OMIM, Orphanet or MIM identifier embedded in the text."""
    for pattern in DISEASE_ID_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def split_disease_text(text: str) -> Tuple[str, Optional[str]]:
    """
    Split free disease text into a name and the rest of the text.

    The name is everything before the first period; the remainder is the
    rest of the text, stripped, or None when nothing follows the name.
    """
    name, _, remainder = text.partition(".")
    remainder = remainder.strip()
    return name.strip(), (remainder or None)


def rank_associations(associations: Sequence[DiseaseAssociation]) -> List[DiseaseAssociation]:
    """Stable sort: evidence level ascending, then score descending."""
    return sorted(associations, key=lambda a: a.sort_key)


def _pick_label(text: str, table: Tuple[Tuple[Optional[str], str], ...]) -> str:
    lowered = text.lower()
    for keyword, label in table:
        if keyword is None or keyword in lowered:
            return label
    return table[-1][1]


class DiseaseAssociationExtractor:
    """
    Turn categorized annotation entries into ranked disease associations.

    Entries are dispatched on their AnnotationCategory; categories without a
    handler contribute nothing.
    """

    def __init__(
        self,
        id_factory: Optional[Callable[[str], str]] = None,
        clock: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize extractor.

        Args:
            id_factory: Builds a record id from a prefix; random by default
            clock: Returns the last-updated marker for free-text records
        """
        self._new_id = id_factory or _default_id_factory
        self._clock = clock or _default_clock
        self._handlers: Dict[
            AnnotationCategory, Callable[[AnnotationEntry], List[DiseaseAssociation]]
        ] = {
            AnnotationCategory.DISEASE: self._from_disease,
            AnnotationCategory.FUNCTION: self._from_function,
            AnnotationCategory.MISCELLANEOUS: self._from_miscellaneous,
            AnnotationCategory.POLYMORPHISM: self._from_polymorphism,
        }

    def extract(
        self,
        entries: Sequence[AnnotationEntry],
        cross_references: Sequence[CrossReference] = (),
    ) -> List[DiseaseAssociation]:
        """
        Extract and rank associations from annotation entries.

        Args:
            entries: Annotation entries in catalog order
            cross_references: OMIM and ORPHA disease cross-references of the entry

        Returns:
            Associations sorted known-first, then by descending score
        """
        associations: List[DiseaseAssociation] = []
        for entry in entries:
            handler = self._handlers.get(entry.category)
            if handler is not None:
                associations.extend(handler(entry))
        associations.extend(self.from_cross_reference(xref) for xref in cross_references)

        logger.debug(f"Extracted {len(associations)} disease associations from {len(entries)} entries")
        return rank_associations(associations)

    def _from_disease(self, entry: AnnotationEntry) -> List[DiseaseAssociation]:
        if entry.texts:
            return [self.from_text(text) for text in entry.texts]
        if entry.disease is not None:
            return [self.from_structured(entry.disease)]
        return [self.from_text(text) for text in entry.note_texts]

    def from_text(self, text: str) -> DiseaseAssociation:
        """Build a known, direct association from one free-text disease entry."""
        name, remainder = split_disease_text(text)
        return DiseaseAssociation(
            id=self._new_id(""),
            disease_name=name or text.strip(),
            disease_id=extract_disease_id(text),
            disease_type="Genetic disease",
            evidence_level=EvidenceLevel.KNOWN,
            association_score=0.9,
            association_type=AssociationType.DIRECT,
            clinical_features=(remainder,) if remainder else (),
            data_source="UniProt",
            last_updated=self._clock(),
        )

    def from_structured(self, disease: StructuredDisease) -> DiseaseAssociation:
        """Build an association from a curated disease sub-record."""
        references = []
        if disease.cross_reference is not None:
            xref = disease.cross_reference
            references.append(
                Reference(id=xref.id, title=f"{xref.database} Reference", journal=xref.database)
            )
        for evidence in disease.evidences:
            if not (evidence.source and evidence.id):
                continue
            references.append(
                Reference(
                    id=evidence.id,
                    title=f"{evidence.source} Reference",
                    journal=evidence.source,
                    pmid=evidence.id if evidence.source.lower() == "pubmed" else None,
                )
            )

        return DiseaseAssociation(
            id=disease.accession or self._new_id(""),
            disease_name=disease.name or "Unknown Disease",
            disease_id=disease.accession,
            disease_type=disease.acronym,
            evidence_level=EvidenceLevel.KNOWN,
            association_score=1.0,
            association_type=AssociationType.DIRECT,
            clinical_features=(disease.description,) if disease.description else (),
            references=tuple(references),
            data_source="UniProt",
        )

    def from_cross_reference(self, xref: CrossReference) -> DiseaseAssociation:
        """Build a known, direct association from an OMIM or ORPHA cross-reference."""
        disease_id = f"{xref.database}:{xref.id}"
        return DiseaseAssociation(
            id=self._new_id(""),
            disease_name=xref.name or disease_id,
            disease_id=disease_id,
            disease_type="Unknown",
            evidence_level=EvidenceLevel.KNOWN,
            association_score=1.0,
            association_type=AssociationType.DIRECT,
            data_source=CROSS_REFERENCE_SOURCES.get(xref.database, xref.database),
        )

    def _from_function(self, entry: AnnotationEntry) -> List[DiseaseAssociation]:
        associations = []
        for text in entry.texts:
            lowered = text.lower()
            if any(keyword in lowered for keyword in SPECIFIC_PATHOGEN_KEYWORDS):
                associations.append(self._covid_association())
            elif any(keyword in lowered for keyword in GENERIC_PATHOGEN_KEYWORDS):
                associations.append(self._viral_association())
        return associations

    def _covid_association(self) -> DiseaseAssociation:
        return DiseaseAssociation(
            id=self._new_id("covid19"),
            disease_name="COVID-19",
            disease_id="COVID-19",
            disease_type="Viral Infection",
            evidence_level=EvidenceLevel.KNOWN,
            association_score=1.0,
            association_type=AssociationType.DIRECT,
            clinical_features=(
                "Severe acute respiratory syndrome",
                "Pneumonia",
                "Multi-organ failure",
            ),
            references=(COVID_REFERENCE,),
            data_source="UniProt Function comment",
            gene_role="Viral protein",
        )

    def _viral_association(self) -> DiseaseAssociation:
        return DiseaseAssociation(
            id=self._new_id("virus"),
            disease_name="Viral Infection",
            disease_id="VIRAL",
            disease_type="Viral Infection",
            evidence_level=EvidenceLevel.UNCERTAIN,
            association_score=0.8,
            association_type=AssociationType.DIRECT,
            clinical_features=("Viral infection symptoms",),
            data_source="UniProt Function comment",
            gene_role="Viral protein",
        )

    def _from_miscellaneous(self, entry: AnnotationEntry) -> List[DiseaseAssociation]:
        return [
            DiseaseAssociation(
                id=self._new_id("misc"),
                disease_name=_pick_label(text, MISCELLANEOUS_LABELS),
                disease_id="MISC",
                disease_type="Miscellaneous",
                evidence_level=EvidenceLevel.UNCERTAIN,
                association_score=0.6,
                association_type=AssociationType.INDIRECT,
                clinical_features=(text,),
                data_source="UniProt Miscellaneous comment",
                gene_role="Protein variant",
            )
            for text in entry.texts
            if _mentions_disease(text)
        ]

    def _from_polymorphism(self, entry: AnnotationEntry) -> List[DiseaseAssociation]:
        return [
            DiseaseAssociation(
                id=self._new_id("poly"),
                disease_name=_pick_label(text, POLYMORPHISM_LABELS),
                disease_id="POLY",
                disease_type="Genetic Disorder",
                evidence_level=EvidenceLevel.UNCERTAIN,
                association_score=0.7,
                association_type=AssociationType.DIRECT,
                clinical_features=(text,),
                data_source="UniProt Polymorphism comment",
                gene_role="Genetic variant",
            )
            for text in entry.texts
            if _mentions_disease(text)
        ]


def _mentions_disease(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in DISEASE_KEYWORDS)
