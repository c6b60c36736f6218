"""Exception types raised across the ingestion and annotation core."""

from typing import Optional


class StructureParseError(ValueError):
    """A recognized record carried a malformed or missing required field."""

    def __init__(self, message: str, line_number: int, line: str, field: Optional[str] = None):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
        self.line = line
        self.field = field


class StructureNotAvailableError(LookupError):
    """No 3-D structure could be obtained; fatal for the whole pipeline."""

    def __init__(self, entry_id: str, reason: str = ""):
        message = f"No 3-D structure available for {entry_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.entry_id = entry_id


class CatalogError(RuntimeError):
    """An external catalog call failed or returned an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnresolvableIdentifierError(LookupError):
    """Every resolution strategy was exhausted without finding an accession."""

    def __init__(self, identifier: str):
        super().__init__(
            f"{identifier} could not be resolved to a protein accession; "
            "it is most likely a synthetic or non-cataloged entity"
        )
        self.identifier = identifier
