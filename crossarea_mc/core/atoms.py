"""
Atom dataset consumed by the simulation.

Coordinates and radii are stored as contiguous float64 arrays so they can be
handed straight to the Numba kernels.
"""

import numpy as np
from typing import Optional, Sequence


class AtomSet:
    """Immutable table of atom centres and radii for one structure."""

    def __init__(self, coords, radii, box_side: Optional[float] = None,
                 names: Optional[Sequence[str]] = None):
        """
        Initialize an atom set.

        Parameters:
            coords: (n_atoms, 3) atom centres [Å]
            radii: (n_atoms,) atomic radii [Å]
            box_side: Side of the square bounding the structure under any
                rotation [Å]. Defaults to the diameter of the sphere about the
                origin that contains every centre.
            names: Optional atom labels, index-aligned with coords
        """
        coords = np.array(coords, dtype=np.float64, ndmin=2)
        radii = np.array(radii, dtype=np.float64, ndmin=1)

        if coords.shape[1] != 3:
            raise ValueError(f"coords must have shape (n_atoms, 3), got {coords.shape}")
        if len(coords) == 0:
            raise ValueError("AtomSet needs at least one atom")
        if radii.shape != (len(coords),):
            raise ValueError(f"Got {len(radii)} radii for {len(coords)} atoms")
        if np.any(radii < 0) or not np.all(np.isfinite(radii)):
            raise ValueError("Atomic radii must be finite and non-negative")
        if not np.all(np.isfinite(coords)):
            raise ValueError("Atom coordinates must be finite")

        if box_side is None:
            box_side = 2.0 * float(np.max(np.linalg.norm(coords, axis=1)))
        elif box_side < 0:
            raise ValueError(f"box_side must be non-negative, got {box_side}")

        if names is not None and len(names) != len(coords):
            raise ValueError(f"Got {len(names)} names for {len(coords)} atoms")

        coords.setflags(write=False)
        radii.setflags(write=False)

        self._coords = coords
        self._radii = radii
        self._box_side = float(box_side)
        self._names = tuple(names) if names is not None else None

    @classmethod
    def centered(cls, coords, radii, names: Optional[Sequence[str]] = None) -> "AtomSet":
        """Build an atom set with centres translated onto their centroid."""
        coords = np.array(coords, dtype=np.float64, ndmin=2)
        return cls(coords - coords.mean(axis=0), radii, names=names)

    @property
    def coords(self) -> np.ndarray:
        return self._coords

    @property
    def radii(self) -> np.ndarray:
        return self._radii

    @property
    def names(self):
        return self._names

    @property
    def n_atoms(self) -> int:
        return len(self._coords)

    @property
    def box_side(self) -> float:
        """Side of the bounding square before the probe margin is added."""
        return self._box_side

    @property
    def largest_atomic_radius(self) -> float:
        return float(np.max(self._radii))

    def enlarged_box_side(self, probe_radius: float) -> float:
        """
        Box side with room for the probe around the edges.

        L + 2 * (probe_radius + largest_atomic_radius)
        """
        return self._box_side + 2.0 * (probe_radius + self.largest_atomic_radius)

    def __len__(self) -> int:
        return self.n_atoms

    def __repr__(self) -> str:
        return (f"AtomSet(n={self.n_atoms}, "
                f"L={self._box_side:.2f} Å, "
                f"r_max={self.largest_atomic_radius:.2f} Å)")
