"""Tests for orientation sampling and projection."""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from crossarea_mc.core.atoms import AtomSet
from crossarea_mc.geometry.rotation import (
    OrientationRotator,
    phi_step_count,
    theta_rotation_matrix,
    phi_projection_matrix,
)


class TestPhiStepCount:

    def test_equator(self):
        assert phi_step_count(np.pi / 2, 8) == 8

    def test_floor(self):
        # 8 * sin(pi/4) = 5.66
        assert phi_step_count(np.pi / 4, 8) == 5

    def test_pole_collapses_to_one(self):
        assert phi_step_count(np.pi, 8) == 1


class TestOrientationRotator:

    def test_thetas_span_to_pi(self, single_atom):
        rotator = OrientationRotator(single_atom, n_theta_steps=4)
        assert_allclose(rotator.thetas(), [np.pi / 4, np.pi / 2, 3 * np.pi / 4, np.pi])

    def test_default_phi_max(self, single_atom):
        rotator = OrientationRotator(single_atom, n_theta_steps=5)
        assert rotator.n_phi_steps_max == 10

    def test_phis_end_on_full_turn(self, single_atom):
        rotator = OrientationRotator(single_atom, n_theta_steps=4)
        phis = rotator.phis(np.pi / 2)

        assert len(phis) == 8
        assert phis[0] == pytest.approx(2 * np.pi / 8)
        assert phis[-1] == pytest.approx(2 * np.pi)

    def test_orientation_count(self, single_atom):
        rotator = OrientationRotator(single_atom, n_theta_steps=4)

        # 5 + 8 + 5 + 1
        assert rotator.n_orientations == 19
        assert len(list(rotator)) == 19
        assert len(rotator) == 19

    def test_invalid_theta_steps(self, single_atom):
        with pytest.raises(ValueError):
            OrientationRotator(single_atom, n_theta_steps=0)

    def test_projection_matches_matrices(self, random_atoms):
        rotator = OrientationRotator(random_atoms, n_theta_steps=6)
        theta, phi = 0.7, 2.1

        projected = rotator.project(theta, phi)
        expected = (phi_projection_matrix(phi) @ theta_rotation_matrix(theta)
                    @ random_atoms.coords.T).T

        assert_allclose(projected, expected[:, :2], atol=1e-12)
        assert_allclose(expected[:, 2], 0.0)

    def test_projection_never_grows(self, random_atoms):
        rotator = OrientationRotator(random_atoms, n_theta_steps=6)
        norms = np.linalg.norm(random_atoms.coords, axis=1)

        for _, _, projected in rotator:
            assert np.all(np.linalg.norm(projected, axis=1) <= norms + 1e-9)

    def test_buffer_is_shared(self, random_atoms):
        rotator = OrientationRotator(random_atoms, n_theta_steps=3)
        buffers = {id(projected) for _, _, projected in rotator}
        assert len(buffers) == 1

    def test_x_axis_pair_ignores_theta(self):
        # Rotation about x leaves atoms on the x axis in place
        atoms = AtomSet([[-3.0, 0.0, 0.0], [3.0, 0.0, 0.0]], [1.0, 1.0])
        rotator = OrientationRotator(atoms, n_theta_steps=8)

        phi = 1.1
        reference = rotator.project(np.pi / 8, phi).copy()
        for theta in rotator.thetas():
            assert_allclose(rotator.project(theta, phi), reference, atol=1e-12)

    def test_y_axis_pair_depends_on_theta(self):
        atoms = AtomSet([[0.0, -3.0, 0.0], [0.0, 3.0, 0.0]], [1.0, 1.0])
        rotator = OrientationRotator(atoms, n_theta_steps=4)

        phi = 2 * np.pi
        separations = []
        for theta in rotator.thetas():
            projected = rotator.project(theta, phi)
            separations.append(np.linalg.norm(projected[0] - projected[1]))

        # End-on at theta = pi/2, full length at theta = pi
        assert separations[1] == pytest.approx(0.0, abs=1e-9)
        assert separations[3] == pytest.approx(6.0)
