"""
CROSSAREA_MC: Monte Carlo Collision Cross Sections

Estimates the rotationally averaged projected area of a rigid set of atoms
as seen by a probe particle of given radius.

Modules:
    core: Atom dataset and result records
    geometry: Orientation sampling, projection and collision testing
    simulation: Per-orientation estimator, aggregation and the run engine
    io: Structure/radius loading and HDF5 result export
"""

__version__ = "0.1.0"

from crossarea_mc.core.atoms import AtomSet
from crossarea_mc.core.results import OrientationEstimate, SimulationResult
from crossarea_mc.config import SimulationConfig
from crossarea_mc.runlog import RunLog
from crossarea_mc.simulation.engine import CrossAreaEngine, cross_area

__all__ = [
    "AtomSet",
    "OrientationEstimate",
    "SimulationResult",
    "SimulationConfig",
    "RunLog",
    "CrossAreaEngine",
    "cross_area",
]
