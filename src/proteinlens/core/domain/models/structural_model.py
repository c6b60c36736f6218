#!/usr/bin/env python3
# src/proteinlens/core/domain/models/structural_model.py

"""
Domain model representing a parsed molecular structure.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
from Bio.Data.IUPACData import atom_weights

from .atom import AtomRecord
from .bond import Bond
from .structure_header import StructureHeader

# Average weight used for elements missing from the periodic table data
DEFAULT_ATOMIC_WEIGHT = 14.0


class StructuralModel:
    """Ordered atoms and bonds of one structure; never mutated after construction."""

    def __init__(
        self,
        atoms: Sequence[AtomRecord],
        bonds: Sequence[Bond] = (),
        header: Optional[StructureHeader] = None,
    ):
        """
        Initialize a StructuralModel.

        Args:
            atoms: Atom records in file order
            bonds: Bonds referencing positions in ``atoms``
            header: Entry-level annotations from the file header

        Raises:
            ValueError: If a bond references an atom index outside the model
        """
        self._atoms: Tuple[AtomRecord, ...] = tuple(atoms)
        self._bonds: Tuple[Bond, ...] = tuple(bonds)
        self._header = header or StructureHeader()

        n_atoms = len(self._atoms)
        for bond in self._bonds:
            if not (0 <= bond.atom_a < n_atoms and 0 <= bond.atom_b < n_atoms):
                raise ValueError(
                    f"Bond ({bond.atom_a}, {bond.atom_b}) references an atom "
                    f"outside a model of {n_atoms} atoms"
                )

    @classmethod
    def empty(cls) -> "StructuralModel":
        return cls(atoms=())

    @property
    def atoms(self) -> Tuple[AtomRecord, ...]:
        return self._atoms

    @property
    def bonds(self) -> Tuple[Bond, ...]:
        return self._bonds

    @property
    def header(self) -> StructureHeader:
        return self._header

    @property
    def atom_count(self) -> int:
        return len(self._atoms)

    @property
    def residue_count(self) -> int:
        return len({atom.residue_key for atom in self._atoms})

    @property
    def chain_ids(self) -> List[str]:
        """Chain identifiers in order of first appearance."""
        return list(dict.fromkeys(atom.chain_id for atom in self._atoms))

    def __len__(self) -> int:
        return len(self._atoms)

    def __repr__(self) -> str:
        return (
            f"StructuralModel(atoms={self.atom_count}, bonds={len(self._bonds)}, "
            f"chains={self.chain_ids})"
        )

    def get_coordinates(self) -> np.ndarray:
        """Get coordinates of all atoms in the model.

        Returns:
            numpy array of shape (n_atoms, 3) containing xyz coordinates
        """
        if not self._atoms:
            return np.zeros((0, 3), dtype=np.float32)
        return np.array([atom.position for atom in self._atoms], dtype=np.float32)

    def bounding_box(self) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
        """Return (min corner, max corner); both are the origin for an empty model."""
        if not self._atoms:
            return (0.0, 0.0, 0.0), (0.0, 0.0, 0.0)
        coords = self.get_coordinates()
        return (
            tuple(float(v) for v in coords.min(axis=0)),
            tuple(float(v) for v in coords.max(axis=0)),
        )

    def center_of_mass(self) -> Tuple[float, float, float]:
        """Unweighted mean of all atom positions (origin for an empty model)."""
        if not self._atoms:
            return (0.0, 0.0, 0.0)
        center = self.get_coordinates().astype(np.float64).mean(axis=0)
        return (float(center[0]), float(center[1]), float(center[2]))

    def molecular_weight(self) -> float:
        """Estimated molecular weight in daltons from standard atomic weights."""
        return float(
            sum(
                atom_weights.get(atom.element, DEFAULT_ATOMIC_WEIGHT)
                for atom in self._atoms
            )
        )
