"""
Viewing orientations and 2D projection of the structure.

Orientations are laid out on the sphere by polar angle theta (rotation about
the x axis) and azimuth phi (rotation about the y axis). The number of phi
steps shrinks with sin(theta) so samples are spread roughly evenly over solid
angle, collapsing to one sample at the pole.
"""

import numpy as np
from typing import Iterator, Tuple

from crossarea_mc.core.atoms import AtomSet


def phi_step_count(theta: float, n_phi_steps_max: int) -> int:
    """Number of azimuthal samples at polar angle theta (at least 1)."""
    n_phi_steps = int(n_phi_steps_max * np.sin(theta))
    if n_phi_steps <= 0:
        n_phi_steps = 1
    return n_phi_steps


def theta_rotation_matrix(theta: float) -> np.ndarray:
    """Rotation about the x axis."""
    c, s = np.cos(theta), np.sin(theta)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


def phi_projection_matrix(phi: float) -> np.ndarray:
    """Rotation about the y axis followed by projection onto the x-y plane."""
    return np.array([
        [np.cos(phi), 0.0, np.sin(phi)],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0],
    ])


class OrientationRotator:
    """
    Enumerates (theta, phi) orientations and projects the atoms for each.

    The projection buffer is shared: every orientation overwrites the array
    yielded for the previous one.

    Example:
        rotator = OrientationRotator(atoms, n_theta_steps=10)
        for theta, phi, projected in rotator:
            grid.rebuild(projected)
    """

    def __init__(self, atoms: AtomSet, n_theta_steps: int, n_phi_steps_max: int = None):
        if n_theta_steps <= 0:
            raise ValueError(f"n_theta_steps must be positive, got {n_theta_steps}")
        if n_phi_steps_max is None:
            n_phi_steps_max = 2 * n_theta_steps

        self.atoms = atoms
        self.n_theta_steps = n_theta_steps
        self.n_phi_steps_max = n_phi_steps_max

        # Reused across orientations
        self._rotated = np.empty((atoms.n_atoms, 3), dtype=np.float64)
        self._projected = np.empty((atoms.n_atoms, 2), dtype=np.float64)

    def thetas(self) -> np.ndarray:
        """Polar angles pi*k/n for k = 1..n (excludes 0, includes pi)."""
        k = np.arange(1, self.n_theta_steps + 1)
        return np.pi * k / self.n_theta_steps

    def phis(self, theta: float) -> np.ndarray:
        """Azimuths 2*pi*j/m for j = 1..m at this theta."""
        n_phi_steps = phi_step_count(theta, self.n_phi_steps_max)
        j = np.arange(1, n_phi_steps + 1)
        return 2.0 * np.pi * j / n_phi_steps

    @property
    def n_orientations(self) -> int:
        return int(sum(phi_step_count(theta, self.n_phi_steps_max)
                       for theta in self.thetas()))

    def rotate_theta(self, theta: float) -> np.ndarray:
        """Rotate every atom centre about the x axis into the shared buffer."""
        # Row vectors: r' = r @ Rx^T
        Rx = theta_rotation_matrix(theta)
        np.dot(self.atoms.coords, Rx.T, out=self._rotated)
        return self._rotated

    def project_phi(self, phi: float) -> np.ndarray:
        """Rotate the theta-rotated centres about y and drop z."""
        Ry_and_proj = phi_projection_matrix(phi)
        np.dot(self._rotated, Ry_and_proj[:2].T, out=self._projected)
        return self._projected

    def project(self, theta: float, phi: float) -> np.ndarray:
        """Projected (x, y) of every atom for a single orientation."""
        self.rotate_theta(theta)
        return self.project_phi(phi)

    def __iter__(self) -> Iterator[Tuple[float, float, np.ndarray]]:
        for theta in self.thetas():
            self.rotate_theta(theta)
            for phi in self.phis(theta):
                yield float(theta), float(phi), self.project_phi(phi)

    def __len__(self) -> int:
        return self.n_orientations
