"""Descriptive header fields collected from a structure file."""

from dataclasses import dataclass
from typing import Optional

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class StructureHeader:
    """Entry-level annotations read from HEADER, EXPDTA and REMARK 2 records."""

    entry_id: str = ""
    classification: str = UNKNOWN
    deposition_date: str = UNKNOWN
    experimental_method: str = UNKNOWN
    resolution: Optional[float] = None

    @property
    def resolution_label(self) -> str:
        if self.resolution is None:
            return UNKNOWN
        return f"{self.resolution:.2f} Å"
