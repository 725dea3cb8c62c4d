"""Tests for the atom dataset."""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from crossarea_mc.core.atoms import AtomSet


class TestAtomSet:

    def test_initialization(self):
        atoms = AtomSet([[1.0, 0.0, 0.0], [0.0, -3.0, 4.0]], [1.5, 2.0])

        assert atoms.n_atoms == 2
        assert len(atoms) == 2
        assert atoms.coords.shape == (2, 3)
        assert atoms.largest_atomic_radius == 2.0
        # Diameter of the sphere containing every centre
        assert atoms.box_side == pytest.approx(10.0)

    def test_explicit_box_side(self):
        atoms = AtomSet([[0.0, 0.0, 0.0]], [1.0], box_side=7.5)
        assert atoms.box_side == 7.5

    def test_radii_count_mismatch(self):
        with pytest.raises(ValueError, match="2 radii for 3 atoms"):
            AtomSet(np.zeros((3, 3)), [1.0, 1.0])

    def test_bad_coordinate_shape(self):
        with pytest.raises(ValueError, match="shape"):
            AtomSet(np.zeros((3, 2)), [1.0, 1.0, 1.0])

    def test_empty(self):
        with pytest.raises(ValueError, match="at least one atom"):
            AtomSet(np.zeros((0, 3)), [])

    def test_negative_radius(self):
        with pytest.raises(ValueError, match="non-negative"):
            AtomSet([[0.0, 0.0, 0.0]], [-1.0])

    def test_negative_box_side(self):
        with pytest.raises(ValueError, match="box_side"):
            AtomSet([[0.0, 0.0, 0.0]], [1.0], box_side=-1.0)

    def test_centered(self):
        atoms = AtomSet.centered([[1.0, 1.0, 1.0], [3.0, 1.0, 1.0]], [1.0, 1.0],
                                 names=['A', 'B'])

        assert_allclose(atoms.coords, [[-1.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        assert atoms.box_side == pytest.approx(2.0)
        assert atoms.names == ('A', 'B')

    def test_single_atom_box(self, single_atom):
        assert single_atom.box_side == 0.0

    def test_arrays_are_read_only(self, single_atom):
        with pytest.raises(ValueError):
            single_atom.coords[0, 0] = 5.0
        with pytest.raises(ValueError):
            single_atom.radii[0] = 5.0

    def test_enlarged_box_side(self):
        atoms = AtomSet([[2.0, 0.0, 0.0], [-2.0, 0.0, 0.0]], [1.0, 1.5])

        assert atoms.enlarged_box_side(0.5) == pytest.approx(4.0 + 2.0 * (0.5 + 1.5))
        # Pure: the stored side is untouched
        assert atoms.box_side == pytest.approx(4.0)
