"""Command-line interface modules."""

from .parse_structure import main as parse_structure_main
from .annotate_structures import main as annotate_structures_main

__all__ = [
    "parse_structure_main",
    "annotate_structures_main",
]
