"""
Accumulation of per-orientation estimates into the tumbling-averaged area.
"""

import numpy as np

from crossarea_mc.core.results import OrientationEstimate


class InsufficientOrientationsError(ValueError):
    """Raised when too few orientations were sampled to form a statistic."""


class AreaAccumulator:
    """
    Running sums of area and standard error over orientations.

    The total ESE treats the per-orientation standard errors as samples:

        ESE = (sum(std_dev) / n) / sqrt(n - 1)

    which needs at least two orientations.
    """

    def __init__(self):
        self.angle_count = 0
        self.area_sum = 0.0
        self.error_sum = 0.0

    def add(self, estimate: OrientationEstimate):
        self.add_area(estimate.area, estimate.std_dev)

    def add_area(self, area: float, std_dev: float):
        self.area_sum += area
        self.error_sum += std_dev
        self.angle_count += 1

    @property
    def mean_area(self) -> float:
        if self.angle_count == 0:
            raise InsufficientOrientationsError("No orientations have been accumulated")
        return self.area_sum / self.angle_count

    @property
    def mean_error(self) -> float:
        if self.angle_count == 0:
            raise InsufficientOrientationsError("No orientations have been accumulated")
        return self.error_sum / self.angle_count

    @property
    def ese(self) -> float:
        if self.angle_count < 2:
            raise InsufficientOrientationsError(
                f"Total ESE needs at least 2 orientations, got {self.angle_count}; "
                f"increase the number of angle steps")
        return self.mean_error / np.sqrt(self.angle_count - 1.0)

    def __repr__(self) -> str:
        return (f"AreaAccumulator(n={self.angle_count}, "
                f"sum_area={self.area_sum:.2f})")
