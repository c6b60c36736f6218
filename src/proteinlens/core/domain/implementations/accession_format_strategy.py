"""Step 1: accept identifiers that already have the canonical accession shape."""

import re
from typing import Optional

from ..interfaces.resolution_strategy import ResolutionStrategy

ACCESSION_PATTERN = re.compile(r"^[PQOABCDEFGHIJKLMNRSTUVWYZ][0-9A-Z]{5}$")


def is_accession(identifier: str) -> bool:
    """True when ``identifier`` is one allowed letter followed by 5 alphanumerics."""
    return ACCESSION_PATTERN.match(identifier) is not None


class AccessionFormatStrategy(ResolutionStrategy):
    """Return the input unchanged when it is already an accession."""

    name = "format-check"
    step = 1

    async def attempt(self, identifier: str) -> Optional[str]:
        candidate = identifier.strip()
        if is_accession(candidate):
            return candidate
        return None
