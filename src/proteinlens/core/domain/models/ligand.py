"""Domain models for ligand groups and ligand candidates."""

from dataclasses import dataclass, replace
from typing import Tuple

ORIGIN = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class LigandGroup:
    """Atoms of one non-polymer residue, keyed by (residue name, chain, residue number)."""

    residue_name: str
    chain_id: str
    residue_number: int
    atom_indices: Tuple[int, ...]
    centroid: Tuple[float, float, float]

    @property
    def key(self) -> str:
        """Composite key used for prefix matching against ligand metadata."""
        return f"{self.residue_name}_{self.chain_id}_{self.residue_number}"


@dataclass(frozen=True)
class LigandCandidate:
    """A ligand as presented to consumers, built fresh on every enrichment pass."""

    name: str
    description: str
    position: Tuple[float, float, float] = ORIGIN
    molecular_weight: float = 0.0  # kDa
    charge: float = 0.0
    type: str = "Ligand"

    def with_position(self, position: Tuple[float, float, float]) -> "LigandCandidate":
        return replace(self, position=position)
