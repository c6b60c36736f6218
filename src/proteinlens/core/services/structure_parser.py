#!/usr/bin/env python3
# src/proteinlens/core/services/structure_parser.py

"""
Service for converting fixed-column structure text into a StructuralModel.

Fields are sliced by column offset, never split on whitespace, because
adjacent fields may abut with no separator. The offsets follow the legacy
PDB convention and are a compatibility contract.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
from Bio.Data.IUPACData import protein_letters_3to1

from ...config import ParserConfig
from ..domain.models.atom import AtomRecord, SecondaryStructure
from ..domain.models.bond import Bond
from ..domain.models.structural_model import StructuralModel
from ..domain.models.structure_header import UNKNOWN, StructureHeader
from ..errors import StructureParseError

logger = logging.getLogger(__name__)

STANDARD_RESIDUES = frozenset(name.upper() for name in protein_letters_3to1)
BACKBONE_ATOMS = frozenset(["CA", "C", "N", "O", "P", "O5'", "C5'", "C4'", "C3'", "O3'"])
TWO_LETTER_ELEMENTS = frozenset(["CA", "MG", "FE", "ZN", "CU", "MN", "NI", "CO"])

# record type -> (structure class, chain columns, start columns, end columns)
RANGE_LAYOUTS: Dict[str, Tuple[SecondaryStructure, Tuple[int, int], Tuple[int, int], Tuple[int, int]]] = {
    "HELIX": (SecondaryStructure.HELIX, (19, 20), (21, 25), (33, 37)),
    "SHEET": (SecondaryStructure.SHEET, (21, 22), (22, 26), (33, 37)),
}
MIN_RANGE_LINE_LENGTH = 37
RESOLUTION_PREFIX = "REMARK   2 RESOLUTION"


@dataclass(frozen=True)
class StructureRange:
    """A helix or sheet annotation covering a residue range of one chain."""

    kind: SecondaryStructure
    chain_id: str
    start: int
    end: int

    def residue_keys(self):
        return ((self.chain_id, number) for number in range(self.start, self.end + 1))


@dataclass
class _ParseState:
    """Mutable accumulator owned by a single parse call."""

    atoms: List[AtomRecord] = field(default_factory=list)
    ranges: List[StructureRange] = field(default_factory=list)
    header: Dict[str, object] = field(default_factory=dict)
    skipped: int = 0


def _to_single(value: float) -> float:
    """Narrow a double to single precision for storage."""
    return float(np.float32(value))


def _required_int(line: str, start: int, end: int, name: str, line_number: int) -> int:
    text = line[start:end].strip()
    try:
        return int(text)
    except ValueError:
        raise StructureParseError(
            f"missing or invalid {name} in columns {start}-{end}: {text!r}",
            line_number=line_number,
            line=line,
            field=name,
        ) from None


def _required_float(line: str, start: int, end: int, name: str, line_number: int) -> float:
    text = line[start:end].strip()
    try:
        value = float(text)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        raise StructureParseError(
            f"missing or invalid {name} in columns {start}-{end}: {text!r}",
            line_number=line_number,
            line=line,
            field=name,
        )
    return value


def _optional_float(text: str, default: float) -> float:
    try:
        return float(text)
    except ValueError:
        return default


def guess_element(atom_name: str, is_hetero: bool = False) -> str:
    """Guess an element symbol from an atom name when the element column is blank."""
    letters = "".join(ch for ch in atom_name.strip() if ch.isalpha())
    if not letters:
        return "C"
    if is_hetero and len(letters) >= 2 and letters[:2].upper() in TWO_LETTER_ELEMENTS:
        return letters[:2].capitalize()
    return letters[0].upper()


def infer_backbone_bonds(atoms: Sequence[AtomRecord]) -> List[Bond]:
    """
    Bond consecutive backbone atoms of one chain whose residue numbers differ by 1.

    This is an index-adjacency approximation, not a distance-based inference:
    it has no distance cutoff, it bonds across chain breaks whose numbering
    happens to be contiguous, and it conflates separate chains that share an
    identifier.

    Args:
        atoms: Atoms in file order

    Returns:
        Bonds between indices into ``atoms``
    """
    bonds = []
    previous: Dict[str, Tuple[int, int]] = {}

    for index, atom in enumerate(atoms):
        if not atom.is_backbone:
            continue
        last = previous.get(atom.chain_id)
        if last is not None and abs(atom.residue_number - last[1]) == 1:
            bonds.append(Bond(last[0], index))
        previous[atom.chain_id] = (index, atom.residue_number)

    return bonds


class StructureParser:
    """Single-pass parser for line-oriented structure text."""

    def __init__(self, config: Optional[ParserConfig] = None):
        """
        Initialize parser.

        Args:
            config: Parser settings; lenient mode when omitted
        """
        self._config = config or ParserConfig()
        self._handlers: Dict[str, Callable[[_ParseState, str, int], None]] = {
            "ATOM": self._handle_atom,
            "HETATM": self._handle_atom,
            "HELIX": self._handle_range,
            "SHEET": self._handle_range,
            "HEADER": self._handle_header,
            "EXPDTA": self._handle_method,
            "REMARK": self._handle_remark,
        }

    @property
    def config(self) -> ParserConfig:
        return self._config

    def parse(self, text: str) -> StructuralModel:
        """
        Parse structure text into a fresh model.

        Unrecognized record types are skipped. Empty input yields an empty model.

        Args:
            text: Raw structure file contents

        Returns:
            StructuralModel with atoms in file order

        Raises:
            StructureParseError: In strict mode, for an atom record whose
                required numeric fields are missing or malformed
        """
        state = _ParseState()

        for line_number, line in enumerate(text.splitlines(), start=1):
            handler = self._handlers.get(line[0:6].strip())
            if handler is not None:
                handler(state, line, line_number)

        atoms = self._assign_secondary_structure(state.atoms, state.ranges)
        bonds = infer_backbone_bonds(atoms)

        if state.skipped:
            logger.debug(f"Skipped {state.skipped} malformed atom records")
        logger.debug(
            f"Parsed {len(atoms)} atoms, {len(bonds)} bonds, "
            f"{len(state.ranges)} structure ranges"
        )

        return StructuralModel(atoms=atoms, bonds=bonds, header=self._build_header(state))

    def parse_file(self, file_path: str) -> StructuralModel:
        """Parse a structure file from disk."""
        with open(file_path, "r") as f:
            return self.parse(f.read())

    def _handle_atom(self, state: _ParseState, line: str, line_number: int) -> None:
        try:
            atom = self._parse_atom_line(line, line_number, len(state.atoms) + 1)
        except StructureParseError as e:
            if self._config.strict:
                raise
            logger.debug(f"Skipping malformed atom record: {e}")
            state.skipped += 1
            return
        state.atoms.append(atom)

    def _parse_atom_line(self, line: str, line_number: int, position: int) -> AtomRecord:
        """Parse ATOM/HETATM record line."""
        record_type = line[0:6].strip()
        residue_number = _required_int(line, 22, 26, "residue number", line_number)
        x = _required_float(line, 30, 38, "x", line_number)
        y = _required_float(line, 38, 46, "y", line_number)
        z = _required_float(line, 46, 54, "z", line_number)

        serial_text = line[6:11].strip()
        serial = int(serial_text) if serial_text.isdigit() else position

        atom_name = line[12:16].strip()
        residue_name = line[17:20].strip()
        chain_id = line[21:22].strip() or self._config.default_chain
        is_hetero = record_type == "HETATM" or residue_name not in STANDARD_RESIDUES
        element = line[76:78].strip() or guess_element(atom_name, is_hetero)

        return AtomRecord(
            serial=serial,
            element=element.capitalize(),
            atom_name=atom_name,
            chain_id=chain_id,
            residue_name=residue_name,
            residue_number=residue_number,
            position=(_to_single(x), _to_single(y), _to_single(z)),
            is_backbone=record_type == "ATOM" and atom_name in BACKBONE_ATOMS,
            is_hetero=is_hetero,
            occupancy=_optional_float(line[54:60].strip(), 1.0),
            temperature_factor=_optional_float(line[60:66].strip(), 0.0),
        )

    def _handle_range(self, state: _ParseState, line: str, line_number: int) -> None:
        if len(line) < MIN_RANGE_LINE_LENGTH:
            return
        kind, chain_cols, start_cols, end_cols = RANGE_LAYOUTS[line[0:6].strip()]
        try:
            start = int(line[start_cols[0]:start_cols[1]].strip())
            end = int(line[end_cols[0]:end_cols[1]].strip())
        except ValueError:
            logger.debug(f"Ignoring unreadable {kind.value} range on line {line_number}")
            return
        if start > end:
            return
        chain_id = line[chain_cols[0]:chain_cols[1]].strip() or self._config.default_chain
        state.ranges.append(StructureRange(kind, chain_id, start, end))

    def _handle_header(self, state: _ParseState, line: str, line_number: int) -> None:
        state.header["classification"] = line[10:50].strip()
        state.header["deposition_date"] = line[50:59].strip()
        state.header["entry_id"] = line[62:66].strip()

    def _handle_method(self, state: _ParseState, line: str, line_number: int) -> None:
        state.header["experimental_method"] = line[10:70].strip()

    def _handle_remark(self, state: _ParseState, line: str, line_number: int) -> None:
        if not line.startswith(RESOLUTION_PREFIX):
            return
        text = line[23:30].strip()
        try:
            state.header["resolution"] = float(text)
        except ValueError:
            pass

    @staticmethod
    def _assign_secondary_structure(
        atoms: List[AtomRecord], ranges: List[StructureRange]
    ) -> List[AtomRecord]:
        """Tag atoms inside recorded ranges; later ranges win, others stay unknown."""
        if not ranges:
            return atoms
        structure_map: Dict[Tuple[str, int], SecondaryStructure] = {}
        for structure_range in ranges:
            for key in structure_range.residue_keys():
                structure_map[key] = structure_range.kind
        return [
            atom.with_secondary_structure(structure_map[atom.residue_key])
            if atom.residue_key in structure_map
            else atom
            for atom in atoms
        ]

    @staticmethod
    def _build_header(state: _ParseState) -> StructureHeader:
        values = state.header
        return StructureHeader(
            entry_id=str(values.get("entry_id") or ""),
            classification=str(values.get("classification") or UNKNOWN),
            deposition_date=str(values.get("deposition_date") or UNKNOWN),
            experimental_method=str(values.get("experimental_method") or UNKNOWN),
            resolution=values.get("resolution"),
        )
