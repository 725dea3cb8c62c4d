"""
Monte Carlo area estimate for a single orientation.

Points are drawn uniformly in the square [-L/2, L/2]² and tested against the
projected atoms. Sampling stops once the relative standard error of the hit
rate falls below the target:

    p_hit       = hits / n
    sigma       = sqrt(p_hit * (1 - p_hit) / n)      (binomial)
    error_ratio = sigma / p_hit

The rule is checked every CHECK_INTERVAL guesses from MIN_GUESSES on, and
never fires while p_hit is exactly 0 or 1. Otherwise sampling runs to the guess
cap (L² by default), which is not an error.
"""

import numpy as np
from typing import Optional, Tuple

from crossarea_mc.config import MIN_GUESSES, CHECK_INTERVAL, ERROR_RATIO_TARGET
from crossarea_mc.core.results import OrientationEstimate
from crossarea_mc.runlog import RunLog

# Verbose iteration lines are written at this spacing
REPORT_INTERVAL = 1000


def binomial_error(hit_count: int, n_guesses: int) -> Tuple[float, float, float]:
    """
    Hit rate, its binomial standard error, and the relative error.

    Returns:
        (p_hit, std_dev, error_ratio); error_ratio is inf when p_hit == 0
    """
    p_hit = hit_count / n_guesses
    std_dev = np.sqrt(p_hit * (1.0 - p_hit) / n_guesses)
    error_ratio = std_dev / p_hit if p_hit > 0.0 else np.inf
    return p_hit, std_dev, error_ratio


def has_converged(p_hit: float, error_ratio: float,
                  target: float = ERROR_RATIO_TARGET) -> bool:
    return error_ratio < target and p_hit != 0.0 and p_hit != 1.0


def default_guess_cap(box_side: float) -> int:
    """L² guesses, and always at least one."""
    return max(1, int(box_side * box_side))


def estimate_orientation(tester, rng: np.random.Generator, box_side: float,
                         max_guesses: Optional[int] = None,
                         theta: float = np.nan, phi: float = np.nan,
                         log: Optional[RunLog] = None,
                         min_guesses: int = MIN_GUESSES,
                         check_interval: int = CHECK_INTERVAL,
                         error_ratio_target: float = ERROR_RATIO_TARGET) -> OrientationEstimate:
    """
    Estimate the projected area for the orientation the tester was built for.

    Parameters:
        tester: LookupGrid or ExhaustiveCollisionTester, already rebuilt
        rng: Random source; x then y is drawn for every guess
        box_side: Enlarged box side L [Å]
        max_guesses: Guess cap (default: floor(L²))
        theta, phi: Orientation, recorded in the result only
        log: Receives the verbose iteration lines
        min_guesses: No stopping before this many guesses
        check_interval: Guesses between convergence checks
        error_ratio_target: Stop when error_ratio drops below this

    Returns:
        OrientationEstimate
    """
    L = box_side
    L2 = L * L
    if max_guesses is None:
        max_guesses = default_guess_cap(L)

    # x² + y² <= L² keeps every point of the square; the comparison is kept
    # as a radius L rather than L/2.
    accept_radius_sq = L2

    hit_count = 0
    n_guesses = 0
    converged = False

    while n_guesses < max_guesses:
        # Blocks end on multiples of check_interval, except a short final one
        block = min(check_interval, max_guesses - n_guesses)
        points = (rng.random((block, 2)) - 0.5) * L
        hit_count += tester.count_hits(points, accept_radius_sq)
        n_guesses += block

        if n_guesses % check_interval == 0 and n_guesses >= min_guesses:
            p_hit, _, error_ratio = binomial_error(hit_count, n_guesses)

            if log is not None and n_guesses % REPORT_INTERVAL == 0:
                log.detail(f"iteration: {n_guesses} estimated error ratio: {error_ratio:f} "
                           f"estimated area: {L2 * p_hit:f}")

            if has_converged(p_hit, error_ratio, error_ratio_target):
                converged = True
                break

    p_hit, std_dev, error_ratio = binomial_error(hit_count, n_guesses)

    return OrientationEstimate(
        theta=float(theta),
        phi=float(phi),
        area=L2 * p_hit,
        std_dev=float(L2 * std_dev),
        p_hit=p_hit,
        hit_count=hit_count,
        n_guesses=n_guesses,
        error_ratio=float(error_ratio),
        converged=converged,
    )
