"""Domain model for heuristic binding-pocket candidates."""

from dataclasses import dataclass
from enum import Enum


class Druggability(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def from_score(cls, score: float) -> "Druggability":
        if score > 0.85:
            return cls.HIGH
        if score > 0.70:
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True)
class PocketCandidate:
    """A coarse, per-chain ranking signal; not the output of a cavity search."""

    name: str
    chain_id: str
    score: float
    volume: int  # cubic angstroms
    druggability: Druggability
    description: str = ""
