import numpy as np
import pytest

from proteinlens.config import ParserConfig
from proteinlens.core.domain.models.atom import SecondaryStructure
from proteinlens.core.errors import StructureParseError
from proteinlens.core.services.structure_parser import (
    StructureParser,
    guess_element,
    infer_backbone_bonds,
)

from pdb_builders import atom_line, ca_trace, helix_line, place, scenario_a_text, sheet_line


@pytest.fixture
def parser():
    return StructureParser()


@pytest.fixture
def strict_parser():
    return StructureParser(ParserConfig(strict=True))


class TestHelixScenario:
    """Five CA atoms covered by one helix range."""

    def test_atoms_are_tagged_helix(self, parser):
        model = parser.parse(scenario_a_text())

        assert model.atom_count == 5
        assert all(a.secondary_structure is SecondaryStructure.HELIX for a in model.atoms)

    def test_consecutive_residues_are_bonded(self, parser):
        model = parser.parse(scenario_a_text())

        pairs = [(b.atom_a, b.atom_b) for b in model.bonds]
        assert pairs == [(0, 1), (1, 2), (2, 3), (3, 4)]

    def test_atoms_keep_file_order(self, parser):
        model = parser.parse(scenario_a_text())

        assert [a.residue_number for a in model.atoms] == [1, 2, 3, 4, 5]
        assert [a.serial for a in model.atoms] == [1, 2, 3, 4, 5]


class TestRecordHandling:
    def test_empty_input_gives_empty_model(self, parser):
        model = parser.parse("")

        assert model.atom_count == 0
        assert model.bonds == ()
        assert model.get_coordinates().shape == (0, 3)

    def test_unrecognized_records_are_skipped(self, parser):
        text = "\n".join(
            ["COMPND    MOLECULE: TEST", "SEQRES   1 A    5  ALA", "TER", "END"] + ca_trace(count=2)
        )
        model = parser.parse(text)

        assert model.atom_count == 2

    def test_atoms_outside_ranges_stay_unknown(self, parser):
        model = parser.parse("\n".join(ca_trace(count=3)))

        assert all(a.secondary_structure is SecondaryStructure.UNKNOWN for a in model.atoms)

    def test_fixed_columns_without_separators(self, parser):
        line = atom_line(1, "CA", "ALA", "A", 1, -999.999, -123.456, -45.678, element="C")
        model = parser.parse(line)

        x, y, z = model.atoms[0].position
        assert x == pytest.approx(-999.999, abs=1e-3)
        assert y == pytest.approx(-123.456, abs=1e-3)
        assert z == pytest.approx(-45.678, abs=1e-3)

    def test_coordinates_are_stored_in_single_precision(self, parser):
        line = atom_line(1, "CA", "ALA", "A", 1, 11.104, 6.134, -6.504, element="C")
        model = parser.parse(line)

        assert model.atoms[0].position == (
            float(np.float32(11.104)),
            float(np.float32(6.134)),
            float(np.float32(-6.504)),
        )

    def test_duplicate_serials_are_retained(self, parser):
        lines = [
            atom_line(7, "N", "ALA", "A", 1, 0.0, 0.0, 0.0, element="N"),
            atom_line(7, "CA", "ALA", "A", 1, 1.0, 0.0, 0.0, element="C"),
        ]
        model = parser.parse("\n".join(lines))

        assert [a.serial for a in model.atoms] == [7, 7]

    def test_blank_serial_falls_back_to_position(self, parser):
        line = atom_line(1, "CA", "ALA", "A", 1, 0.0, 0.0, 0.0)
        line = line[:6] + "     " + line[11:]
        model = parser.parse(line)

        assert model.atoms[0].serial == 1

    def test_chain_is_read_from_its_own_column(self, parser):
        # Four-letter residue names run into column 21
        line = place(
            [
                (0, "HETATM"),
                (6, "    1"),
                (12, " OH2"),
                (17, "TIP3"),
                (21, "W"),
                (22, "   1"),
                (30, "   1.000   2.000   3.000"),
            ]
        )
        atom = parser.parse(line).atoms[0]

        assert atom.chain_id == "W"
        assert atom.residue_name == "TIP"
        assert atom.residue_number == 1

    def test_blank_chain_uses_default(self):
        parser = StructureParser(ParserConfig(default_chain="Z"))
        model = parser.parse(atom_line(1, "CA", "ALA", "", 1, 0.0, 0.0, 0.0))

        assert model.atoms[0].chain_id == "Z"

    def test_occupancy_and_temperature_factor(self, parser):
        line = atom_line(1, "CA", "ALA", "A", 1, 0.0, 0.0, 0.0, occupancy=0.5, temp_factor=23.4)
        atom = parser.parse(line).atoms[0]

        assert atom.occupancy == pytest.approx(0.5)
        assert atom.temperature_factor == pytest.approx(23.4)


class TestMalformedRecords:
    def _bad_line(self):
        line = atom_line(1, "CA", "ALA", "A", 1, 1.0, 2.0, 3.0)
        return line[:30] + "   abc  " + line[38:]

    def test_lenient_mode_skips_malformed_atoms(self, parser):
        text = "\n".join([self._bad_line()] + ca_trace(count=2))
        model = parser.parse(text)

        assert model.atom_count == 2

    def test_strict_mode_raises_structured_fault(self, strict_parser):
        text = "\n".join(ca_trace(count=1) + [self._bad_line()])

        with pytest.raises(StructureParseError) as excinfo:
            strict_parser.parse(text)

        assert excinfo.value.line_number == 2
        assert excinfo.value.field == "x"
        assert str(excinfo.value).startswith("line 2:")

    def test_strict_mode_requires_residue_number(self, strict_parser):
        line = atom_line(1, "CA", "ALA", "A", 1, 1.0, 2.0, 3.0)
        line = line[:22] + "    " + line[26:]

        with pytest.raises(StructureParseError) as excinfo:
            strict_parser.parse(line)
        assert excinfo.value.field == "residue number"

    def test_truncated_atom_line(self, strict_parser):
        with pytest.raises(StructureParseError):
            strict_parser.parse("ATOM      1  CA  ALA A   1      11.104")


class TestSecondaryStructureRanges:
    def test_sheet_range(self, parser):
        text = "\n".join([sheet_line("A", 2, 3)] + ca_trace(count=4))
        tags = [a.secondary_structure for a in parser.parse(text).atoms]

        assert tags == [
            SecondaryStructure.UNKNOWN,
            SecondaryStructure.SHEET,
            SecondaryStructure.SHEET,
            SecondaryStructure.UNKNOWN,
        ]

    def test_later_range_wins_on_overlap(self, parser):
        text = "\n".join([helix_line("A", 1, 4), sheet_line("A", 3, 4)] + ca_trace(count=4))
        tags = [a.secondary_structure for a in parser.parse(text).atoms]

        assert tags[:2] == [SecondaryStructure.HELIX] * 2
        assert tags[2:] == [SecondaryStructure.SHEET] * 2

    def test_range_only_applies_to_its_chain(self, parser):
        text = "\n".join([helix_line("B", 1, 5)] + ca_trace(chain="A", count=2))
        model = parser.parse(text)

        assert all(a.secondary_structure is SecondaryStructure.UNKNOWN for a in model.atoms)

    def test_inverted_range_is_ignored(self, parser):
        text = "\n".join([helix_line("A", 5, 1)] + ca_trace(count=5))
        model = parser.parse(text)

        assert all(a.secondary_structure is SecondaryStructure.UNKNOWN for a in model.atoms)

    def test_short_range_line_is_ignored(self, parser):
        text = "\n".join(["HELIX    1   1 ALA A    1"] + ca_trace(count=2))
        model = parser.parse(text)

        assert all(a.secondary_structure is SecondaryStructure.UNKNOWN for a in model.atoms)


class TestBondInference:
    def test_residue_gap_breaks_bonding(self, parser):
        lines = [
            atom_line(1, "CA", "ALA", "A", 1, 0.0, 0.0, 0.0),
            atom_line(2, "CA", "ALA", "A", 2, 3.8, 0.0, 0.0),
            atom_line(3, "CA", "ALA", "A", 4, 7.6, 0.0, 0.0),
        ]
        model = parser.parse("\n".join(lines))

        assert [(b.atom_a, b.atom_b) for b in model.bonds] == [(0, 1)]

    def test_side_chain_atoms_do_not_break_adjacency(self, parser):
        lines = [
            atom_line(1, "CA", "ALA", "A", 1, 0.0, 0.0, 0.0),
            atom_line(2, "CB", "ALA", "A", 1, 0.5, 1.0, 0.0),
            atom_line(3, "CA", "ALA", "A", 2, 3.8, 0.0, 0.0),
        ]
        model = parser.parse("\n".join(lines))

        assert [(b.atom_a, b.atom_b) for b in model.bonds] == [(0, 2)]

    def test_chains_are_bonded_separately(self, parser):
        lines = ca_trace(chain="A", count=2) + ca_trace(chain="B", count=2)
        model = parser.parse("\n".join(lines))

        assert [(b.atom_a, b.atom_b) for b in model.bonds] == [(0, 1), (2, 3)]

    def test_hetero_calcium_is_not_backbone(self, parser):
        lines = ca_trace(count=1) + [
            atom_line(2, "CA", "CA", "A", 2, 5.0, 0.0, 0.0, record="HETATM", element="CA"),
        ]
        model = parser.parse("\n".join(lines))

        ion = model.atoms[1]
        assert not ion.is_backbone
        assert ion.is_hetero
        assert ion.element == "Ca"
        assert model.bonds == ()

    def test_infer_backbone_bonds_on_empty_input(self):
        assert infer_backbone_bonds([]) == []


class TestElementsAndHeader:
    @pytest.mark.parametrize(
        "atom_name,is_hetero,expected",
        [
            ("CA", False, "C"),
            ("CA", True, "Ca"),
            ("FE", True, "Fe"),
            ("OG1", False, "O"),
            ("1HB", False, "H"),
            ("123", False, "C"),
        ],
    )
    def test_guess_element(self, atom_name, is_hetero, expected):
        assert guess_element(atom_name, is_hetero) == expected

    def test_blank_element_column_is_guessed(self, parser):
        atom = parser.parse(atom_line(1, "N", "ALA", "A", 1, 0.0, 0.0, 0.0)).atoms[0]

        assert atom.element == "N"

    def test_header_records(self, parser):
        text = "\n".join(
            [
                place([(0, "HEADER"), (10, "HYDROLASE"), (50, "01-JAN-98"), (62, "1ABC")]),
                "EXPDTA    X-RAY DIFFRACTION",
                "REMARK   2 RESOLUTION.    2.20 ANGSTROMS.",
            ]
            + ca_trace(count=1)
        )
        header = parser.parse(text).header

        assert header.classification == "HYDROLASE"
        assert header.deposition_date == "01-JAN-98"
        assert header.entry_id == "1ABC"
        assert header.experimental_method == "X-RAY DIFFRACTION"
        assert header.resolution == pytest.approx(2.2)

    def test_missing_header_defaults_to_unknown(self, parser):
        header = parser.parse("\n".join(ca_trace(count=1))).header

        assert header.classification == "Unknown"
        assert header.experimental_method == "Unknown"
        assert header.resolution is None
        assert header.resolution_label == "Unknown"

    def test_parse_file(self, parser, tmp_path):
        path = tmp_path / "1ABC.pdb"
        path.write_text(scenario_a_text())

        assert parser.parse_file(str(path)).atom_count == 5
