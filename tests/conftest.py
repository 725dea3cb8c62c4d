"""Pytest configuration and shared fixtures for crossarea_mc tests."""

import pytest
import numpy as np

from crossarea_mc.core.atoms import AtomSet
from crossarea_mc.config import SimulationConfig


def pdb_atom_line(serial, name, x, y, z, element='', record='ATOM'):
    """Fixed-column PDB ATOM/HETATM record."""
    return (f"{record:<6}{serial:>5} {name:<4} {'ALA':>3} A{1:>4}    "
            f"{x:8.3f}{y:8.3f}{z:8.3f}{1.0:6.2f}{0.0:6.2f}          {element:>2}")


@pytest.fixture
def single_atom():
    """One atom of radius 2 Å at the origin."""
    return AtomSet.centered([[0.0, 0.0, 0.0]], [2.0])


@pytest.fixture
def random_atoms():
    """Small random cluster with mixed radii."""
    rng = np.random.default_rng(7)
    coords = rng.normal(scale=3.0, size=(25, 3))
    radii = rng.uniform(1.0, 2.0, size=25)
    return AtomSet.centered(coords, radii)


@pytest.fixture
def fast_config():
    """Factory for quick configurations with a fixed guess budget."""
    def make(**overrides):
        params = dict(n_theta_steps=4, probe_radius=0.0, seed=1, max_guesses=2000)
        params.update(overrides)
        return SimulationConfig(**params)
    return make


@pytest.fixture
def radius_file(tmp_path):
    path = tmp_path / 'radii.lib'
    path.write_text(
        "# test radii\n"
        "C   1.70\n"
        "N   1.55   # nitrogen\n"
        "\n"
        "o   1.52\n"
    )
    return path


@pytest.fixture
def write_pdb(tmp_path):
    """Write (name, x, y, z, element) tuples as a PDB file."""
    def write(atoms, filename='structure.pdb', extra_lines=()):
        lines = ["HEADER    TEST STRUCTURE"]
        for serial, (name, x, y, z, element) in enumerate(atoms, 1):
            lines.append(pdb_atom_line(serial, name, x, y, z, element))
        lines.extend(extra_lines)
        lines.append("END")
        path = tmp_path / filename
        path.write_text("\n".join(lines) + "\n")
        return path
    return write


@pytest.fixture
def two_carbon_pdb(write_pdb):
    return write_pdb([
        ('C1', 0.0, 0.0, 0.0, 'C'),
        ('C2', 1.5, 0.0, 0.0, 'C'),
    ])
