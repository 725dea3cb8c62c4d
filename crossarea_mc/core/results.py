"""
Result records for per-orientation estimates and whole runs.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List


@dataclass
class OrientationEstimate:
    """Monte Carlo area estimate for one viewing orientation."""

    theta: float
    phi: float
    area: float            # L² * p_hit [Å²]
    std_dev: float         # L² * binomial standard error [Å²]
    p_hit: float
    hit_count: int
    n_guesses: int
    error_ratio: float     # relative standard error of p_hit at the final guess count
    converged: bool        # stopped by the error-ratio rule, not the guess cap


@dataclass
class SimulationResult:
    """Outcome of a full run over all orientations."""

    mean_area: float
    ese: float
    box_side: float        # enlarged L used for sampling [Å]
    probe_radius: float
    n_theta_steps: int
    n_phi_steps_max: int
    seed: int
    collision_method: str = 'grid'
    orientations: List[OrientationEstimate] = field(default_factory=list)

    @property
    def n_orientations(self) -> int:
        return len(self.orientations)

    def column(self, name: str) -> np.ndarray:
        """One OrientationEstimate attribute across all orientations."""
        return np.array([getattr(o, name) for o in self.orientations])

    @property
    def areas(self) -> np.ndarray:
        return self.column('area')

    @property
    def n_converged(self) -> int:
        return int(np.sum(self.column('converged'))) if self.orientations else 0

    def __repr__(self) -> str:
        return (f"SimulationResult(area={self.mean_area:.2f} Å², "
                f"ESE={self.ese:.3g}, "
                f"orientations={self.n_orientations})")
