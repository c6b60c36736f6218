import asyncio
from dataclasses import replace

import pytest

from proteinlens.config import AggregatorConfig, ParserConfig
from proteinlens.core.domain.models import (
    AccessionMapping,
    AnnotationCategory,
    AnnotationEntry,
    AnnotationSource,
    CrossReference,
    DiseaseStatus,
    EntryMetadata,
    LigandCandidate,
    ProteinEntry,
)
from proteinlens.core.errors import StructureNotAvailableError
from proteinlens.core.services.annotation_aggregator import AnnotationAggregator, clean_title
from proteinlens.core.services.structure_parser import StructureParser
from proteinlens.infrastructure.repositories.structure_repository import StructureRepository

from fakes import (
    FakeLigandCatalog,
    FakeMappingCatalog,
    FakeProteinCatalog,
    FakeStructureCatalog,
)
from pdb_builders import atom_line, scenario_a_text

CFTR = ProteinEntry(
    accession="P13569",
    recommended_name="Cystic fibrosis transmembrane conductance regulator",
    gene="CFTR",
    organism="Homo sapiens",
    function_texts=("Epithelial ion channel.",),
    go_terms=("GO:0005524",),
    pathways=("ABC-family proteins mediated transport",),
    annotations=(
        AnnotationEntry(
            AnnotationCategory.DISEASE,
            texts=("Cystic fibrosis. Caused by mutations in CFTR.",),
        ),
    ),
)


def structure_with_ligand():
    lines = scenario_a_text().splitlines()
    lines.insert(-1, atom_line(6, "PG", "ATP", "A", 101, 1.0, 2.0, 3.0, record="HETATM", element="P"))
    return "\n".join(lines)


def build(
    structures=None,
    proteins=None,
    ligands=None,
    mappings=None,
    step_timeout=None,
):
    structures = structures or FakeStructureCatalog(
        structures={"1A4U": structure_with_ligand()},
        entries={
            "1A4U": EntryMetadata(
                entry_id="1A4U", title="CRYSTAL STRUCTURE OF CFTR NBD1", resolution=2.2
            )
        },
    )
    proteins = proteins or FakeProteinCatalog(entries={"P13569": CFTR})
    ligands = ligands or FakeLigandCatalog(
        ligands={"1A4U": [LigandCandidate(name="ATP", description="Adenosine triphosphate")]}
    )
    mappings = mappings or FakeMappingCatalog(
        mappings={"1A4U": [AccessionMapping(accession="P13569", name="CFTR_HUMAN")]}
    )
    aggregator = AnnotationAggregator(
        structures=StructureRepository(catalog=structures),
        protein_catalog=proteins,
        structure_catalog=structures,
        ligand_catalog=ligands,
        mapping_catalog=mappings,
        config=AggregatorConfig(step_timeout=step_timeout),
    )
    return aggregator, structures, proteins, ligands, mappings


def annotate(aggregator, entry_id="1A4U"):
    return asyncio.run(aggregator.annotate(entry_id))


class TestFullAnnotation:
    def test_merged_record(self):
        aggregator, *_ = build()
        result = annotate(aggregator, "1a4u")

        assert result.entry_id == "1A4U"
        assert result.model.atom_count == 6
        assert result.resolution.accession == "P13569"
        assert result.resolution.step is None
        assert result.resolution.strategy == "identifier-mapping"
        assert result.description.value == CFTR.recommended_name
        assert result.description.source is AnnotationSource.PROTEIN_CATALOG
        assert result.function.value == "Epithelial ion channel."
        assert result.gene.value == "CFTR"
        assert result.organism.value == "Homo sapiens"
        assert result.go_terms == ("GO:0005524",)
        assert result.pathways == ("ABC-family proteins mediated transport",)
        assert not result.is_partial
        assert result.stage_errors == {}

    def test_diseases_are_extracted(self):
        aggregator, *_ = build()
        result = annotate(aggregator)

        assert result.disease_status is DiseaseStatus.AVAILABLE
        assert [d.disease_name for d in result.diseases] == ["Cystic fibrosis"]
        assert result.disease_summary.known_diseases == 1

    def test_ligand_metadata_is_positioned(self):
        aggregator, *_ = build()
        result = annotate(aggregator)

        assert [l.name for l in result.ligands] == ["ATP"]
        assert result.ligands[0].position == pytest.approx((1.0, 2.0, 3.0))

    def test_entry_metadata_is_kept(self):
        aggregator, *_ = build()
        result = annotate(aggregator)

        assert result.entry_metadata.resolution == 2.2


class TestPrecedence:
    def test_entry_title_is_second_choice(self):
        proteins = FakeProteinCatalog(
            entries={"P13569": ProteinEntry(accession="P13569", gene="CFTR")}
        )
        aggregator, *_ = build(proteins=proteins)
        result = annotate(aggregator)

        assert result.description.value == "CFTR NBD1"
        assert result.description.source is AnnotationSource.ENTRY_METADATA
        assert result.function.value == "Function not available"
        assert result.function.is_placeholder

    def test_mapping_name_is_last_choice(self):
        structures = FakeStructureCatalog(structures={"1A4U": scenario_a_text()})
        proteins = FakeProteinCatalog(failing={"fetch_entry"})
        aggregator, *_ = build(structures=structures, proteins=proteins)
        result = annotate(aggregator)

        assert result.description.value == "CFTR_HUMAN"
        assert result.description.source is AnnotationSource.IDENTIFIER_MAPPING

    def test_placeholder_when_nothing_is_available(self):
        structures = FakeStructureCatalog(structures={"1A4U": scenario_a_text()})
        proteins = FakeProteinCatalog(failing={"fetch_entry"})
        mappings = FakeMappingCatalog(failing={"fetch_accession_mappings"})
        aggregator, *_ = build(structures=structures, proteins=proteins, mappings=mappings)
        result = annotate(aggregator)

        assert result.description.value == "Protein 1A4U"
        assert result.description.is_placeholder
        assert result.organism.value == "Unknown organism"
        assert result.gene.value == "Unknown"


class TestDegradation:
    def test_structure_is_mandatory(self):
        structures = FakeStructureCatalog()
        aggregator, *_ = build(structures=structures)

        with pytest.raises(StructureNotAvailableError):
            annotate(aggregator)

    def test_failed_ligand_stage_degrades(self):
        ligands = FakeLigandCatalog(failing={"fetch_ligands"})
        aggregator, *_ = build(ligands=ligands)
        result = annotate(aggregator)

        assert "ligands" in result.placeholders
        assert "ligand-metadata" in result.stage_errors
        assert [l.type for l in result.ligands] == ["Ligand (structure-derived)"]
        assert result.gene.value == "CFTR"

    def test_failed_stage_does_not_cancel_siblings(self):
        structures = FakeStructureCatalog(
            structures={"1A4U": scenario_a_text()}, failing={"fetch_entry"}
        )
        aggregator, _, proteins, ligands, _ = build(structures=structures)
        result = annotate(aggregator)

        assert "entry-metadata" in result.stage_errors
        assert result.entry_metadata is None
        assert ligands.call_count == 1
        assert ("fetch_entry", "P13569") in proteins.calls
        assert result.description.value == CFTR.recommended_name

    def test_failed_annotation_marks_diseases_placeholder(self):
        proteins = FakeProteinCatalog(failing={"fetch_entry"})
        aggregator, *_ = build(proteins=proteins)
        result = annotate(aggregator)

        assert result.disease_status is DiseaseStatus.PLACEHOLDER
        assert "diseases" in result.placeholders
        assert "protein-annotation" in result.stage_errors
        assert result.is_partial

    def test_timed_out_stage_is_a_failed_stage(self):
        ligands = FakeLigandCatalog(delay=0.5)
        aggregator, *_ = build(ligands=ligands, step_timeout=0.1)
        result = annotate(aggregator)

        assert result.stage_errors["ligand-metadata"] == "timed out"
        assert result.gene.value == "CFTR"

    def test_malformed_structure_is_not_available(self):
        structures = FakeStructureCatalog(
            structures={"1A4U": scenario_a_text() + "ATOM      9  CA  ALA A   9     not-a-number\n"}
        )
        aggregator = AnnotationAggregator(
            structures=StructureRepository(
                parser=StructureParser(ParserConfig(strict=True)), catalog=structures
            ),
            protein_catalog=FakeProteinCatalog(),
            structure_catalog=structures,
            ligand_catalog=FakeLigandCatalog(),
            mapping_catalog=FakeMappingCatalog(),
        )

        with pytest.raises(StructureNotAvailableError) as excinfo:
            annotate(aggregator)
        assert "malformed" in str(excinfo.value)

    def test_disease_cross_references_are_merged(self):
        entry = replace(
            CFTR, disease_cross_references=(CrossReference("ORPHA", "586", "Cystic fibrosis"),)
        )
        aggregator, *_ = build(proteins=FakeProteinCatalog(entries={"P13569": entry}))
        result = annotate(aggregator)

        assert [d.disease_id for d in result.diseases] == ["ORPHA:586", None]
        assert result.disease_summary.known_diseases == 2


class TestResolutionFallback:
    def test_resolver_runs_when_mapping_is_empty(self):
        mappings = FakeMappingCatalog()
        aggregator, *_ = build(mappings=mappings)
        result = annotate(aggregator)

        assert result.resolution.accession == "P13569"
        assert result.resolution.step == 2

    def test_unresolvable_entry(self):
        structures = FakeStructureCatalog(structures={"9XYZ": scenario_a_text()})
        aggregator, _, proteins, _, _ = build(structures=structures, mappings=FakeMappingCatalog())
        result = annotate(aggregator, "9XYZ")

        assert not result.resolution.is_resolved
        assert result.disease_status is DiseaseStatus.UNRESOLVABLE
        assert result.diseases == ()
        assert not any(call[0] == "fetch_entry" for call in proteins.calls)

    def test_plant_protein_is_not_applicable(self):
        structures = FakeStructureCatalog(structures={"4KPO": scenario_a_text()})
        proteins = FakeProteinCatalog(
            entries={"B6T563": ProteinEntry(accession="B6T563", organism="Zea mays")}
        )
        aggregator, *_ = build(
            structures=structures, proteins=proteins, mappings=FakeMappingCatalog()
        )
        result = annotate(aggregator, "4KPO")

        assert result.resolution.accession == "B6T563"
        assert result.disease_status is DiseaseStatus.NOT_APPLICABLE
        assert result.organism.value == "Zea mays"


@pytest.mark.parametrize(
    "title,expected",
    [
        ("CRYSTAL STRUCTURE OF HUMAN LYSOZYME", "HUMAN LYSOZYME"),
        ("nmr structure of ubiquitin", "ubiquitin"),
        ("X-RAY STRUCTURE OF MYOGLOBIN", "MYOGLOBIN"),
        ("HEMOGLOBIN", "HEMOGLOBIN"),
        ("", None),
        (None, None),
    ],
)
def test_clean_title(title, expected):
    assert clean_title(title) == expected
