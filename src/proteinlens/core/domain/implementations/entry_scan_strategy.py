"""Step 5: scan the raw entry document for accession-shaped substrings."""

import re
from typing import Iterator, Optional

from ..interfaces.catalogs import StructureCatalog
from ..interfaces.resolution_strategy import ResolutionStrategy

EMBEDDED_ACCESSION_PATTERN = re.compile(r"\b[PQOABCDEFGHIJKLMNRSTUVWYZ][0-9A-Z]{5}\b")
# Shapes that match the accession pattern but are known to be noise
FALSE_POSITIVE_PATTERNS = (
    re.compile(r"^PP[A-Z]{4}$"),  # peptide motifs such as PPGPPG
    re.compile(r"^[A-Z]{6}$"),
    re.compile(r"^[0-9]{6}$"),
)


def is_plausible_accession(candidate: str) -> bool:
    """
    Reject degenerate accession-shaped strings.

    Runs of one repeated character, all-digit and all-letter strings and the
    ``PP....`` peptide template are rejected. Real accessions always carry
    at least one digit.
    """
    if len(set(candidate)) == 1:
        return False
    if any(pattern.match(candidate) for pattern in FALSE_POSITIVE_PATTERNS):
        return False
    return any(ch.isdigit() for ch in candidate)


def scan_accessions(text: str) -> Iterator[str]:
    """Yield plausible accessions in order of appearance."""
    for match in EMBEDDED_ACCESSION_PATTERN.finditer(text):
        candidate = match.group(0)
        if is_plausible_accession(candidate):
            yield candidate


class EntryPatternScanStrategy(ResolutionStrategy):
    """Fetch the full entry document and return its first plausible accession."""

    name = "entry-pattern-scan"
    step = 5

    def __init__(self, catalog: StructureCatalog):
        self._catalog = catalog

    async def attempt(self, identifier: str) -> Optional[str]:
        document = await self._catalog.fetch_entry_document(identifier.strip().upper())
        return next(scan_accessions(document), None)
