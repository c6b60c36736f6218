"""Command-line interface for the full fetch, resolve and annotate pipeline."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import httpx
from tqdm import tqdm

from ...config import AggregatorConfig, ClientConfig, ParserConfig
from ...core.errors import StructureNotAvailableError
from ...core.services.annotation_aggregator import AnnotationAggregator
from ...core.services.structure_parser import StructureParser
from ...infrastructure.clients import (
    PdbeLigandClient,
    RcsbClient,
    SiftsMappingClient,
    UniProtClient,
)
from ...infrastructure.repositories.structure_repository import StructureRepository
from .formatting import summarize_annotation

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Fetch structures and merge best-effort annotations"
    )
    parser.add_argument("entry_ids", nargs="+", help="Structure entry ids, e.g. 1A4U")
    parser.add_argument(
        "--data-dir",
        help="Directory of local <ID>.pdb files checked before downloading",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Per-request HTTP timeout (seconds)",
    )
    parser.add_argument(
        "--step-timeout",
        type=float,
        default=15.0,
        help="Overall timeout per external step (seconds)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed atom records instead of skipping them",
    )
    parser.add_argument("--output", help="Write JSON here instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


async def annotate_all(
    args: argparse.Namespace, transport: Optional[httpx.AsyncBaseTransport] = None
) -> List[Dict[str, Any]]:
    """
    Run the pipeline for every requested entry, one at a time.

    Args:
        args: Parsed command-line arguments
        transport: HTTP transport for every catalog client; httpx default when None

    Returns:
        One summary per entry, or an ``error`` record for entries without a structure
    """
    logger = logging.getLogger(__name__)
    client_config = ClientConfig(timeout=args.timeout)
    results: List[Dict[str, Any]] = []

    async with httpx.AsyncClient(
        timeout=client_config.timeout,
        headers={"User-Agent": client_config.user_agent},
        follow_redirects=True,
        transport=transport,
    ) as http:
        rcsb = RcsbClient(client_config, http)
        repository = StructureRepository(
            parser=StructureParser(ParserConfig(strict=args.strict)),
            catalog=rcsb,
            data_dir=args.data_dir,
        )
        aggregator = AnnotationAggregator(
            structures=repository,
            protein_catalog=UniProtClient(client_config, http),
            structure_catalog=rcsb,
            ligand_catalog=PdbeLigandClient(client_config, http),
            mapping_catalog=SiftsMappingClient(client_config, http),
            config=AggregatorConfig(step_timeout=args.step_timeout),
        )

        entry_ids = args.entry_ids
        for entry_id in tqdm(entry_ids, desc="Annotating", disable=len(entry_ids) < 2):
            try:
                result = await aggregator.annotate(entry_id)
            except StructureNotAvailableError as e:
                logger.error(str(e))
                results.append({"entry_id": entry_id.upper(), "error": str(e)})
                continue
            results.append(summarize_annotation(result))

    return results


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the annotation CLI."""
    args = setup_parser().parse_args(argv)
    setup_logging(args.verbose)

    results = asyncio.run(annotate_all(args))
    payload = results[0] if len(results) == 1 else results

    if args.output:
        with open(args.output, "w") as f:
            json.dump(payload, f, indent=2)
    else:
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")

    return 1 if any("error" in r for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())
