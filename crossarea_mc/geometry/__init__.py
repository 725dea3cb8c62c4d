"""Geometry module: Orientation sampling and collision testing."""

from crossarea_mc.geometry.rotation import OrientationRotator
from crossarea_mc.geometry.collision import LookupGrid, ExhaustiveCollisionTester

__all__ = ["OrientationRotator", "LookupGrid", "ExhaustiveCollisionTester"]
