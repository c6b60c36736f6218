"""Command-line interface for parsing and analyzing a local structure file."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from ...config import ParserConfig
from ...core.errors import StructureParseError
from ...core.services.geometric_analyzer import GeometricAnalyzer
from ...core.services.structure_parser import StructureParser
from .formatting import summarize_analysis, summarize_model

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(description="Parse and analyze a structure file")
    parser.add_argument("structure_file", help="Path to a PDB-format structure file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed atom records instead of skipping them",
    )
    parser.add_argument(
        "--chain",
        default="A",
        help="Chain id assigned to atoms with a blank chain column",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the structure parsing CLI."""
    args = setup_parser().parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    parser = StructureParser(ParserConfig(strict=args.strict, default_chain=args.chain))
    try:
        model = parser.parse_file(args.structure_file)
    except StructureParseError as e:
        logger.error(f"Failed to parse {args.structure_file}: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read {args.structure_file}: {e}")
        return 1

    analysis = GeometricAnalyzer().analyze(model)
    summary = summarize_model(model)
    summary.update(summarize_analysis(analysis))
    json.dump(summary, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
