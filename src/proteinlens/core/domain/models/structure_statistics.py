"""Domain model for secondary-structure composition of a model."""

from dataclasses import dataclass, field
from typing import Dict

from .atom import SecondaryStructure


@dataclass(frozen=True)
class SecondaryStructureStats:
    """Per-class atom counts and percentage shares."""

    total: int
    counts: Dict[SecondaryStructure, int] = field(default_factory=dict)
    percentages: Dict[SecondaryStructure, float] = field(default_factory=dict)

    def percentage(self, kind: SecondaryStructure) -> float:
        return self.percentages.get(kind, 0.0)

    def count(self, kind: SecondaryStructure) -> int:
        return self.counts.get(kind, 0)
