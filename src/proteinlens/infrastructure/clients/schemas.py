"""Pydantic models for the catalog wire formats.

Only the fields the core consumes are declared; everything else in a
response is ignored.
"""

from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ...core.domain.models.annotation import (
    AnnotationCategory,
    AnnotationEntry,
    CrossReference,
    EvidenceCode,
    StructuredDisease,
)
from ...core.domain.models.catalog_records import EntryMetadata, ProteinEntry
from ...core.domain.models.ligand import LigandCandidate


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TextValue(_Wire):
    value: Optional[str] = None


class DiseaseCrossReference(_Wire):
    database: Optional[str] = None
    id: Optional[str] = None


class Evidence(_Wire):
    evidence_code: Optional[str] = Field(default=None, alias="evidenceCode")
    source: Optional[str] = None
    id: Optional[str] = None


class Disease(_Wire):
    disease_id: Optional[str] = Field(default=None, alias="diseaseId")
    disease_accession: Optional[str] = Field(default=None, alias="diseaseAccession")
    acronym: Optional[str] = None
    description: Optional[str] = None
    cross_reference: Optional[DiseaseCrossReference] = Field(
        default=None, alias="diseaseCrossReference"
    )
    evidences: List[Evidence] = Field(default_factory=list)

    def to_domain(self) -> StructuredDisease:
        xref = None
        if self.cross_reference and self.cross_reference.database and self.cross_reference.id:
            xref = CrossReference(self.cross_reference.database, self.cross_reference.id)
        return StructuredDisease(
            name=self.disease_id or "Unknown Disease",
            accession=self.disease_accession,
            acronym=self.acronym,
            description=self.description,
            cross_reference=xref,
            evidences=tuple(
                EvidenceCode(code=e.evidence_code or "", source=e.source, id=e.id)
                for e in self.evidences
            ),
        )


class Note(_Wire):
    texts: List[TextValue] = Field(default_factory=list)


class Comment(_Wire):
    comment_type: Optional[str] = Field(default=None, alias="commentType")
    texts: List[TextValue] = Field(default_factory=list)
    disease: Optional[Disease] = None
    note: Optional[Note] = None

    def to_domain(self) -> Optional[AnnotationEntry]:
        category = AnnotationCategory.from_label(self.comment_type)
        if category is None:
            return None
        return AnnotationEntry(
            category=category,
            texts=tuple(t.value for t in self.texts if t.value),
            disease=self.disease.to_domain() if self.disease else None,
            note_texts=tuple(t.value for t in self.note.texts if t.value) if self.note else (),
        )


class Property(_Wire):
    key: Optional[str] = None
    value: Optional[str] = None


class UniProtCrossReference(_Wire):
    database: Optional[str] = None
    id: Optional[str] = None
    properties: List[Property] = Field(default_factory=list)

    def property_value(self, key: str) -> Optional[str]:
        for prop in self.properties:
            if prop.key == key:
                return prop.value
        return None


class ProteinName(_Wire):
    full_name: Optional[TextValue] = Field(default=None, alias="fullName")


class ProteinDescription(_Wire):
    recommended_name: Optional[ProteinName] = Field(default=None, alias="recommendedName")


class Gene(_Wire):
    gene_name: Optional[TextValue] = Field(default=None, alias="geneName")


class Organism(_Wire):
    scientific_name: Optional[str] = Field(default=None, alias="scientificName")


# Cross-reference databases that name a disease, with the id prefix used for it
DISEASE_DATABASES = {"MIM": "OMIM", "Orphanet": "ORPHA"}


class UniProtEntry(_Wire):
    """Subset of the UniProtKB JSON entry document."""

    primary_accession: str = Field(alias="primaryAccession")
    protein_description: ProteinDescription = Field(
        default_factory=ProteinDescription, alias="proteinDescription"
    )
    genes: List[Gene] = Field(default_factory=list)
    organism: Organism = Field(default_factory=Organism)
    comments: List[Comment] = Field(default_factory=list)
    cross_references: List[UniProtCrossReference] = Field(
        default_factory=list, alias="uniProtKBCrossReferences"
    )

    @property
    def recommended_name(self) -> Optional[str]:
        name = self.protein_description.recommended_name
        if name is None or name.full_name is None:
            return None
        return name.full_name.value

    @property
    def gene_name(self) -> Optional[str]:
        for gene in self.genes:
            if gene.gene_name and gene.gene_name.value:
                return gene.gene_name.value
        return None

    def disease_cross_references(self) -> List[CrossReference]:
        """MIM phenotype and Orphanet cross-references; MIM gene entries are skipped."""
        references = []
        for xref in self.cross_references:
            if xref.database not in DISEASE_DATABASES or not xref.id:
                continue
            if xref.database == "MIM" and (xref.property_value("Type") or "").lower() == "gene":
                continue
            name = xref.property_value("Disease") or xref.property_value("name")
            references.append(CrossReference(DISEASE_DATABASES[xref.database], xref.id, name))
        return references

    def to_domain(self) -> ProteinEntry:
        function_texts = [
            text.value
            for comment in self.comments
            if (comment.comment_type or "").upper() == "FUNCTION"
            for text in comment.texts
            if text.value
        ]
        annotations = [comment.to_domain() for comment in self.comments]
        return ProteinEntry(
            accession=self.primary_accession,
            recommended_name=self.recommended_name,
            gene=self.gene_name,
            organism=self.organism.scientific_name,
            function_texts=tuple(function_texts),
            go_terms=tuple(x.id for x in self.cross_references if x.database == "GO" and x.id),
            pathways=tuple(
                x.property_value("PathwayName") or x.id
                for x in self.cross_references
                if x.database == "Reactome" and x.id
            ),
            annotations=tuple(a for a in annotations if a is not None),
            disease_cross_references=tuple(self.disease_cross_references()),
        )


class SearchHit(_Wire):
    primary_accession: Optional[str] = Field(default=None, alias="primaryAccession")


class UniProtSearchResults(_Wire):
    results: List[SearchHit] = Field(default_factory=list)


class LigandMonomer(_Wire):
    """One row of the PDBe ligand-monomer listing (snake or camel case)."""

    chem_comp_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("chem_comp_id", "chemCompId")
    )
    chem_comp_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("chem_comp_name", "moleculeName")
    )
    weight: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("weight", "formulaWeight")
    )
    charge: Optional[float] = None

    @field_validator("chem_comp_name", mode="before")
    @classmethod
    def _first_name(cls, value):
        if isinstance(value, list):
            return value[0] if value else None
        return value

    def to_domain(self) -> LigandCandidate:
        return LigandCandidate(
            name=self.chem_comp_id or "LIG",
            description=self.chem_comp_name or "Small molecule",
            molecular_weight=(self.weight or 0.0) / 1000.0,
            charge=self.charge or 0.0,
        )


class LigandListing(_Wire):
    """Ligand rows for one entry; PDBe sends either a bare list or a wrapping object."""

    ligand_monomers: List[LigandMonomer] = Field(default_factory=list, alias="ligandMonomers")

    @model_validator(mode="before")
    @classmethod
    def _wrap_rows(cls, value):
        if value is None:
            return {}
        if isinstance(value, list):
            return {"ligandMonomers": value}
        return value


class SiftsAccession(_Wire):
    identifier: Optional[str] = None
    name: Optional[str] = None


class SiftsEntry(_Wire):
    """SIFTS mapping payload for one entry: accession -> mapping details."""

    uniprot: Dict[str, Optional[SiftsAccession]] = Field(default_factory=dict, alias="UniProt")

    @model_validator(mode="before")
    @classmethod
    def _empty(cls, value):
        return {} if value is None else value


class RcsbStruct(_Wire):
    title: Optional[str] = None
    pdbx_descriptor: Optional[str] = None


class RcsbExperiment(_Wire):
    method: Optional[str] = None


class RcsbEntryInfo(_Wire):
    resolution_combined: Optional[List[float]] = None


class RcsbKeywords(_Wire):
    pdbx_keywords: Optional[str] = None


class RcsbCitation(_Wire):
    journal_abbrev: Optional[str] = None


class RcsbStructRef(_Wire):
    db_name: Optional[str] = None
    db_accession: Optional[str] = None


class RcsbXref(_Wire):
    id: Optional[str] = None


class RcsbEntity(_Wire):
    uniprot_xref: Optional[List[RcsbXref]] = None


class RcsbEntry(_Wire):
    """Subset of the RCSB core entry document."""

    struct: RcsbStruct = Field(default_factory=RcsbStruct)
    exptl: List[RcsbExperiment] = Field(default_factory=list)
    rcsb_entry_info: RcsbEntryInfo = Field(default_factory=RcsbEntryInfo)
    struct_keywords: RcsbKeywords = Field(default_factory=RcsbKeywords)
    rcsb_primary_citation: RcsbCitation = Field(default_factory=RcsbCitation)
    struct_ref: List[RcsbStructRef] = Field(default_factory=list)
    entities: List[RcsbEntity] = Field(default_factory=list)

    def to_domain(self, entry_id: str) -> EntryMetadata:
        resolutions = self.rcsb_entry_info.resolution_combined or []
        return EntryMetadata(
            entry_id=entry_id,
            title=self.struct.title,
            descriptor=self.struct.pdbx_descriptor,
            experimental_method=self.exptl[0].method if self.exptl else None,
            resolution=resolutions[0] if resolutions else None,
            keywords=self.struct_keywords.pdbx_keywords,
            journal=self.rcsb_primary_citation.journal_abbrev,
        )

    def uniprot_accessions(self) -> List[str]:
        """Accessions from ``struct_ref`` rows, then from per-entity ``uniprot_xref`` lists."""
        accessions = [
            ref.db_accession
            for ref in self.struct_ref
            if (ref.db_name or "").lower() == "uniprot" and ref.db_accession
        ]
        for entity in self.entities:
            accessions.extend(x.id for x in entity.uniprot_xref or [] if x.id)
        return accessions


class ReferenceSequenceIdentifier(_Wire):
    database_name: Optional[str] = None
    database_accession: Optional[str] = None


class RcsbContainerIdentifiers(_Wire):
    reference_sequence_identifiers: Optional[List[ReferenceSequenceIdentifier]] = None


class RcsbPolymerEntity(_Wire):
    container_identifiers: RcsbContainerIdentifiers = Field(
        default_factory=RcsbContainerIdentifiers,
        alias="rcsb_polymer_entity_container_identifiers",
    )
    uniprot_xref: Optional[List[RcsbXref]] = None

    def uniprot_accessions(self) -> List[str]:
        identifiers = self.container_identifiers.reference_sequence_identifiers or []
        accessions = [
            ident.database_accession
            for ident in identifiers
            if ident.database_name == "UniProt" and ident.database_accession
        ]
        accessions.extend(x.id for x in self.uniprot_xref or [] if x.id)
        return accessions
