"""Core module: Atom dataset and result records."""

from crossarea_mc.core.atoms import AtomSet
from crossarea_mc.core.results import OrientationEstimate, SimulationResult

__all__ = ["AtomSet", "OrientationEstimate", "SimulationResult"]
