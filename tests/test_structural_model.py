from dataclasses import astuple

import numpy as np
import pytest
from Bio.Data.IUPACData import atom_weights

from proteinlens.core.domain.models import AtomRecord, Bond, StructuralModel


def make_atom(index, chain="A", residue=1, element="C", position=(0.0, 0.0, 0.0)):
    return AtomRecord(
        serial=index,
        element=element,
        atom_name="CA",
        chain_id=chain,
        residue_name="ALA",
        residue_number=residue,
        position=position,
    )


def test_bond_index_must_be_inside_model():
    atoms = [make_atom(1), make_atom(2)]

    with pytest.raises(ValueError):
        StructuralModel(atoms, bonds=[Bond(0, 2)])


def test_bond_is_a_plain_index_pair():
    assert astuple(Bond(0, 1)) == (0, 1)
    assert Bond(0, 1) == Bond(0, 1)


def test_empty_model():
    model = StructuralModel.empty()

    assert len(model) == 0
    assert model.get_coordinates().shape == (0, 3)
    assert model.center_of_mass() == (0.0, 0.0, 0.0)
    assert model.bounding_box() == ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    assert model.molecular_weight() == 0.0
    assert model.chain_ids == []


def test_summaries():
    atoms = [
        make_atom(1, chain="B", residue=1, position=(0.0, 0.0, 0.0)),
        make_atom(2, chain="B", residue=1, element="O", position=(2.0, 4.0, -2.0)),
        make_atom(3, chain="A", residue=1, element="N", position=(4.0, 2.0, 2.0)),
    ]
    model = StructuralModel(atoms, bonds=[Bond(0, 1)])

    assert model.atom_count == 3
    assert model.residue_count == 2
    assert model.chain_ids == ["B", "A"]
    assert model.center_of_mass() == pytest.approx((2.0, 2.0, 0.0))
    low, high = model.bounding_box()
    assert low == pytest.approx((0.0, 0.0, -2.0))
    assert high == pytest.approx((4.0, 4.0, 2.0))
    assert model.molecular_weight() == pytest.approx(
        atom_weights["C"] + atom_weights["O"] + atom_weights["N"]
    )


def test_unknown_element_uses_default_weight():
    model = StructuralModel([make_atom(1, element="Xx")])

    assert model.molecular_weight() == pytest.approx(14.0)


def test_coordinates_are_single_precision():
    model = StructuralModel([make_atom(1, position=(1.5, 2.5, 3.5))])
    coords = model.get_coordinates()

    assert coords.dtype == np.float32
    assert coords.tolist() == [[1.5, 2.5, 3.5]]


def test_model_holds_immutable_sequences():
    atoms = [make_atom(1)]
    model = StructuralModel(atoms)
    atoms.append(make_atom(2))

    assert model.atom_count == 1
    assert isinstance(model.atoms, tuple)
