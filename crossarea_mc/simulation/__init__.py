"""Simulation module: Monte Carlo estimator, aggregation and engine."""

from crossarea_mc.simulation.aggregator import AreaAccumulator, InsufficientOrientationsError
from crossarea_mc.simulation.engine import CrossAreaEngine, cross_area

__all__ = ["AreaAccumulator", "InsufficientOrientationsError", "CrossAreaEngine", "cross_area"]
