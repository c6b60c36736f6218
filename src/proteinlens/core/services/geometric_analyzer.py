#!/usr/bin/env python3
# src/proteinlens/core/services/geometric_analyzer.py

"""
Service deriving ligands, secondary-structure statistics and pocket
candidates from a StructuralModel.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from Bio.Data.IUPACData import atom_weights

from ...config import AnalyzerConfig
from ..domain.models.annotated_structure import StructureAnalysis
from ..domain.models.atom import SecondaryStructure
from ..domain.models.ligand import LigandCandidate, LigandGroup
from ..domain.models.pocket import Druggability, PocketCandidate
from ..domain.models.structural_model import DEFAULT_ATOMIC_WEIGHT, StructuralModel
from ..domain.models.structure_statistics import SecondaryStructureStats

logger = logging.getLogger(__name__)

# Non-polymer residues reported as ligands; solvent is never included
LIGAND_RESIDUES = frozenset(
    ["ATP", "ADP", "GTP", "GDP", "NAD", "FAD", "FMN", "COA", "HEM", "MG", "CA", "ZN", "FE", "MN"]
)
SOLVENT_RESIDUES = frozenset(["HOH"])
STRUCTURE_DERIVED_TYPE = "Ligand (structure-derived)"


def centroid(coords: np.ndarray) -> Tuple[float, float, float]:
    """Arithmetic mean of an (n, 3) coordinate array."""
    center = np.asarray(coords, dtype=np.float64).mean(axis=0)
    return (float(center[0]), float(center[1]), float(center[2]))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class GeometricAnalyzer:
    """Pure, deterministic analytics over one structural model."""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self._config = config or AnalyzerConfig()

    def analyze(
        self, model: StructuralModel, ligand_metadata: Sequence[LigandCandidate] = ()
    ) -> StructureAnalysis:
        """
        Run every analysis on a model.

        Args:
            model: Parsed structure
            ligand_metadata: Independently fetched ligand metadata, if any

        Returns:
            StructureAnalysis bundling ligands, pockets and statistics
        """
        groups = self.group_ligands(model)
        return StructureAnalysis(
            ligand_groups=tuple(groups),
            ligands=tuple(self.merge_ligands(groups, ligand_metadata, model)),
            pockets=tuple(self.find_pockets(model)),
            secondary_structure=self.secondary_structure_stats(model),
        )

    def group_ligands(self, model: StructuralModel) -> List[LigandGroup]:
        """
        Partition allow-listed non-polymer atoms by (residue name, chain, residue number).

        Returns:
            Groups in order of first appearance, each with its centroid
        """
        members: Dict[Tuple[str, str, int], List[int]] = {}
        for index, atom in enumerate(model.atoms):
            name = atom.residue_name
            if name in LIGAND_RESIDUES and name not in SOLVENT_RESIDUES:
                members.setdefault((name, atom.chain_id, atom.residue_number), []).append(index)

        coords = model.get_coordinates()
        return [
            LigandGroup(
                residue_name=name,
                chain_id=chain_id,
                residue_number=number,
                atom_indices=tuple(indices),
                centroid=centroid(coords[indices]),
            )
            for (name, chain_id, number), indices in members.items()
        ]

    def merge_ligands(
        self,
        groups: Sequence[LigandGroup],
        metadata: Sequence[LigandCandidate],
        model: Optional[StructuralModel] = None,
    ) -> List[LigandCandidate]:
        """
        Merge fetched ligand metadata with geometric groups.

        Metadata takes the centroid of the first group whose composite key
        starts with ``"<name>_"``; unmatched metadata keeps its position.
        Groups matched by no metadata become structure-derived candidates.

        Args:
            groups: Ligand groups from ``group_ligands``
            metadata: Ligand metadata from an external catalog
            model: Model the groups came from, used for weight estimates

        Returns:
            New LigandCandidate values; inputs are left untouched
        """
        merged = []
        matched_keys = set()

        for item in metadata:
            prefix = f"{item.name}_"
            matches = [group for group in groups if group.key.startswith(prefix)]
            matched_keys.update(group.key for group in matches)
            if matches:
                merged.append(item.with_position(matches[0].centroid))
            else:
                merged.append(item)

        for group in groups:
            if group.key in matched_keys:
                continue
            merged.append(self._candidate_from_group(group, model))

        logger.debug(
            f"Merged {len(metadata)} ligand records with {len(groups)} groups "
            f"into {len(merged)} candidates"
        )
        return merged

    def secondary_structure_stats(self, model: StructuralModel) -> SecondaryStructureStats:
        """Per-class atom counts and percentages; all zero for an empty model."""
        total = model.atom_count
        counts = {kind: 0 for kind in SecondaryStructure}
        for atom in model.atoms:
            counts[atom.secondary_structure] += 1
        percentages = {
            kind: (100.0 * count / total if total else 0.0) for kind, count in counts.items()
        }
        return SecondaryStructureStats(total=total, counts=counts, percentages=percentages)

    def find_pockets(self, model: StructuralModel) -> List[PocketCandidate]:
        """
        Rank chains by a crude compactness heuristic.

        This is not a cavity-finding algorithm. For each chain with enough
        atoms, compactness is the inverse of the mean distance to the chain
        centroid; the score and volume are a coarse ranking signal only.

        Returns:
            One PocketCandidate per qualifying chain, in chain order; the site
            number is the chain's position among all chains, small ones included
        """
        cfg = self._config
        coords = model.get_coordinates().astype(np.float64)
        by_chain: Dict[str, List[int]] = {}
        for index, atom in enumerate(model.atoms):
            by_chain.setdefault(atom.chain_id, []).append(index)

        pockets = []
        for position, (chain_id, indices) in enumerate(by_chain.items(), start=1):
            if len(indices) < cfg.min_chain_atoms:
                continue
            chain_coords = coords[indices]
            center = chain_coords.mean(axis=0)
            mean_distance = float(np.linalg.norm(chain_coords - center, axis=1).mean())

            density = _clamp(1.0 / (mean_distance + cfg.density_epsilon), 0.0, 1.0)
            volume = _clamp(
                len(indices) * mean_distance * cfg.volume_constant,
                cfg.min_volume,
                cfg.max_volume,
            )
            score = min(0.95, 0.55 + 0.4 * density)

            pockets.append(
                PocketCandidate(
                    name=f"Binding Site {position} - Chain {chain_id}",
                    chain_id=chain_id,
                    score=score,
                    volume=int(volume),
                    druggability=Druggability.from_score(score),
                    description=f"Heuristic pocket near chain {chain_id} centroid",
                )
            )

        return pockets

    @staticmethod
    def _candidate_from_group(
        group: LigandGroup, model: Optional[StructuralModel]
    ) -> LigandCandidate:
        weight = 0.0
        if model is not None:
            weight = sum(
                atom_weights.get(model.atoms[i].element, DEFAULT_ATOMIC_WEIGHT)
                for i in group.atom_indices
            )
        return LigandCandidate(
            name=group.residue_name,
            description=(
                f"{group.residue_name} (chain {group.chain_id}, "
                f"residue {group.residue_number})"
            ),
            position=group.centroid,
            molecular_weight=weight / 1000.0,
            charge=0.0,
            type=STRUCTURE_DERIVED_TYPE,
        )
