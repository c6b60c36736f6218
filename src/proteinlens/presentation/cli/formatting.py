"""JSON-ready summaries of models, analyses and annotated structures."""

from typing import Any, Dict

from ...core.domain.models.annotated_structure import (
    AnnotatedStructure,
    ProvenancedValue,
    StructureAnalysis,
)
from ...core.domain.models.disease_association import DiseaseAssociation
from ...core.domain.models.structural_model import StructuralModel


def _rounded(values, digits: int = 3):
    return [round(float(v), digits) for v in values]


def summarize_model(model: StructuralModel) -> Dict[str, Any]:
    header = model.header
    low, high = model.bounding_box()
    return {
        "entry_id": header.entry_id or None,
        "classification": header.classification,
        "experimental_method": header.experimental_method,
        "resolution": header.resolution_label,
        "atoms": model.atom_count,
        "bonds": len(model.bonds),
        "residues": model.residue_count,
        "chains": model.chain_ids,
        "bounding_box": {"min": _rounded(low), "max": _rounded(high)},
        "center_of_mass": _rounded(model.center_of_mass()),
        "molecular_weight_kda": round(model.molecular_weight() / 1000.0, 2),
    }


def summarize_analysis(analysis: StructureAnalysis) -> Dict[str, Any]:
    stats = analysis.secondary_structure
    return {
        "secondary_structure": {
            kind.value: round(stats.percentage(kind), 2) for kind in stats.percentages
        },
        "ligands": [
            {
                "name": ligand.name,
                "description": ligand.description,
                "position": _rounded(ligand.position),
                "molecular_weight_kda": round(ligand.molecular_weight, 3),
                "charge": ligand.charge,
                "type": ligand.type,
            }
            for ligand in analysis.ligands
        ],
        "pockets": [
            {
                "name": pocket.name,
                "score": round(pocket.score, 3),
                "volume": pocket.volume,
                "druggability": pocket.druggability.value,
            }
            for pocket in analysis.pockets
        ],
    }


def _field(value: ProvenancedValue) -> Dict[str, str]:
    return {"value": value.value, "source": value.source.value}


def summarize_disease(association: DiseaseAssociation) -> Dict[str, Any]:
    return {
        "name": association.disease_name,
        "id": association.disease_id,
        "type": association.disease_type,
        "evidence": association.evidence_level.label,
        "score": association.association_score,
        "association": association.association_type.value,
        "clinical_features": list(association.clinical_features),
        "references": [ref.id for ref in association.references],
    }


def summarize_annotation(result: AnnotatedStructure) -> Dict[str, Any]:
    return {
        "entry_id": result.entry_id,
        "accession": result.resolution.accession,
        "resolution_step": result.resolution.step,
        "resolution_strategy": result.resolution.strategy,
        "description": _field(result.description),
        "function": _field(result.function),
        "gene": _field(result.gene),
        "organism": _field(result.organism),
        "go_terms": list(result.go_terms),
        "pathways": list(result.pathways),
        "disease_status": result.disease_status.value,
        "diseases": [summarize_disease(d) for d in result.diseases],
        "structure": summarize_model(result.model),
        "analysis": summarize_analysis(result.analysis),
        "partial": result.is_partial,
        "placeholders": sorted(result.placeholders),
        "stage_errors": dict(result.stage_errors),
    }
