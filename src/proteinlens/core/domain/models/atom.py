#!/usr/bin/env python3
# src/proteinlens/core/domain/models/atom.py

"""
Domain model representing an atom record in a molecular structure.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class SecondaryStructure(Enum):
    """Local backbone conformation class of a residue."""

    HELIX = "helix"
    SHEET = "sheet"
    COIL = "coil"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AtomRecord:
    """Represents one atom record parsed from a structure file."""

    serial: int
    element: str
    atom_name: str
    chain_id: str
    residue_name: str
    residue_number: int
    position: Tuple[float, float, float]
    secondary_structure: SecondaryStructure = SecondaryStructure.UNKNOWN
    is_backbone: bool = False
    is_hetero: bool = False
    occupancy: float = 1.0
    temperature_factor: float = 0.0

    @property
    def residue_key(self) -> Tuple[str, int]:
        """(chain, residue number) pair identifying the owning residue."""
        return (self.chain_id, self.residue_number)

    def with_secondary_structure(self, kind: SecondaryStructure) -> "AtomRecord":
        """Return a copy of this atom tagged with another structure class."""
        return replace(self, secondary_structure=kind)
