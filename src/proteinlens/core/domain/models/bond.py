#!/usr/bin/env python3
# src/proteinlens/core/domain/models/bond.py

"""
Domain model representing a bond between atoms.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Bond:
    """Represents a bond as a pair of indices into the owning model's atoms."""

    atom_a: int
    atom_b: int
