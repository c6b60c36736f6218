"""Configuration objects for the parser, analyzer, clients and aggregator."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParserConfig:
    """
    Structure parser settings.

    Attributes:
        strict: Raise StructureParseError on malformed atom records instead of
            skipping them
        default_chain: Chain id assigned when the chain column is blank
    """

    strict: bool = False
    default_chain: str = "A"


@dataclass(frozen=True)
class AnalyzerConfig:
    """Tunables of the pocket heuristic."""

    volume_constant: float = 8.0
    density_epsilon: float = 0.001
    min_chain_atoms: int = 12
    min_volume: float = 300.0
    max_volume: float = 1800.0


@dataclass(frozen=True)
class ClientConfig:
    """HTTP settings and endpoint roots for the catalog clients."""

    timeout: float = 10.0
    user_agent: str = "proteinlens/0.1"
    uniprot_base_url: str = "https://rest.uniprot.org"
    rcsb_data_url: str = "https://data.rcsb.org/rest/v1/core"
    rcsb_files_url: str = "https://files.rcsb.org/download"
    pdbe_api_url: str = "https://www.ebi.ac.uk/pdbe/api"


@dataclass(frozen=True)
class AggregatorConfig:
    """
    Aggregation settings.

    Attributes:
        step_timeout: Seconds allowed for each external step; a step that
            times out is treated exactly like a failed step. None disables it.
    """

    step_timeout: Optional[float] = 15.0
