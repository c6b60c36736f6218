"""Outcome of resolving an identifier to a canonical protein accession."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ResolvedIdentifier:
    """Either a resolved accession (with the step that found it) or unresolvable.

    Unresolvable is a terminal outcome meaning the input most likely names a
    synthetic or non-cataloged entity; it is never replaced by a guess.
    """

    query: str
    accession: Optional[str] = None
    step: Optional[int] = None
    strategy: Optional[str] = None

    @classmethod
    def resolved(
        cls, query: str, accession: str, step: Optional[int], strategy: str
    ) -> "ResolvedIdentifier":
        return cls(query=query, accession=accession, step=step, strategy=strategy)

    @classmethod
    def unresolvable(cls, query: str) -> "ResolvedIdentifier":
        return cls(query=query)

    @property
    def is_resolved(self) -> bool:
        return self.accession is not None

    def __str__(self) -> str:
        if not self.is_resolved:
            return f"{self.query} -> unresolvable"
        return f"{self.query} -> {self.accession} (step {self.step}, {self.strategy})"
