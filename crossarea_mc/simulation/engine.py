"""
Monte Carlo cross-section engine.

For every orientation:
    - rotate and project the atoms
    - rebuild the collision index
    - sample points until the hit rate converges (or the guess cap)
    - fold the estimate into the running mean

The mean over all orientations is the tumbling-averaged projected area, i.e.
the collision cross section for a probe of the given radius.
"""

import numpy as np
from tqdm import tqdm
from typing import Optional

from crossarea_mc.config import ConfigurationError, SimulationConfig, validate_config
from crossarea_mc.core.atoms import AtomSet
from crossarea_mc.core.results import SimulationResult
from crossarea_mc.geometry.collision import make_collision_tester
from crossarea_mc.geometry.rotation import OrientationRotator
from crossarea_mc.io.structure import load_structure
from crossarea_mc.runlog import RunLog
from crossarea_mc.simulation.aggregator import AreaAccumulator
from crossarea_mc.simulation.estimator import estimate_orientation


class CrossAreaEngine:
    """
    Runs the orientation sweep for one set of parameters.

    Example:
        engine = CrossAreaEngine(SimulationConfig(n_theta_steps=10, probe_radius=1.0))
        result = engine.run(atoms)
        print(result.mean_area, result.ese)
    """

    def __init__(self, config: SimulationConfig):
        validate_config(config)
        self.config = config

    def run(self, atoms: AtomSet, log: Optional[RunLog] = None,
            progress: bool = False) -> SimulationResult:
        """
        Estimate the mean projected area of a structure.

        The atom set is not modified; the probe margin is added to a local
        copy of the box side, once per call.

        Parameters:
            atoms: Structure to measure
            log: Output destination (default: stdout/stderr)
            progress: Show a tqdm bar over orientations on stderr

        Returns:
            SimulationResult

        Raises:
            InsufficientOrientationsError: Fewer than two orientations sampled
            ConfigurationError: No lookup grid fits the probe and atom radii
        """
        cfg = self.config
        if log is None:
            log = RunLog(verbose=cfg.verbose)
        elif cfg.verbose:
            log.verbose = True

        # Leave room for the probe around the edges of the box
        box_side = atoms.enlarged_box_side(cfg.probe_radius)

        try:
            tester = make_collision_tester(cfg.collision_method, atoms.radii,
                                           cfg.probe_radius, box_side)
        except ValueError as e:
            raise ConfigurationError(f"{e}; use another probe radius or "
                                     f"collision_method='exhaustive'") from e

        log.info("\nStarting Monte-Carlo area measurement.")

        rng = np.random.default_rng(cfg.seed)
        rotator = OrientationRotator(atoms, cfg.n_theta_steps, cfg.n_phi_steps_max)
        accumulator = AreaAccumulator()
        estimates = []

        orientations = tqdm(rotator, total=rotator.n_orientations, disable=not progress,
                            desc="Projections", unit="orientation")

        for theta, phi, projected in orientations:
            tester.rebuild(projected)

            log.detail(f"Projecting at angles: {theta:g} {phi:g}")

            estimate = estimate_orientation(
                tester, rng, box_side,
                max_guesses=cfg.max_guesses,
                theta=theta, phi=phi, log=log,
                min_guesses=cfg.min_guesses,
                check_interval=cfg.check_interval,
                error_ratio_target=cfg.error_ratio_target,
            )

            accumulator.add(estimate)
            estimates.append(estimate)

            log.info(f"Calculation converged for this set of angles. "
                     f"Area: {estimate.area:g} Estimated Error: {estimate.std_dev:g}")

        mean_area = accumulator.mean_area
        ese = accumulator.ese

        log.info(f"Mean Area Over All Projections: {mean_area:g}\nTotal ESE: {ese:g}")

        return SimulationResult(
            mean_area=mean_area,
            ese=float(ese),
            box_side=box_side,
            probe_radius=float(cfg.probe_radius),
            n_theta_steps=cfg.n_theta_steps,
            n_phi_steps_max=cfg.n_phi_steps_max,
            seed=cfg.seed,
            collision_method=cfg.collision_method,
            orientations=estimates,
        )

    def run_files(self, structure_file, radius_file, log: Optional[RunLog] = None,
                  progress: bool = False) -> SimulationResult:
        """Load a structure and its radii, then run."""
        if log is None:
            log = RunLog(verbose=self.config.verbose)

        log.info(f'Reading coordinates from file "{structure_file}" '
                 f'and radii from "{radius_file}"')
        atoms = load_structure(structure_file, radius_file)

        return self.run(atoms, log=log, progress=progress)


def cross_area(n_theta_steps: int, n_phi_steps_max: Optional[int], probe_radius: float,
               structure_file, radius_file, seed: int = 0,
               log: Optional[RunLog] = None, verbose: bool = False,
               **options) -> float:
    """
    Mean cross-sectional area of a structure file over all orientations.

    Parameters:
        n_theta_steps: Polar angle steps
        n_phi_steps_max: Azimuthal steps at the equator (None: 2 * n_theta_steps)
        probe_radius: Probe particle radius [Å]
        structure_file: PDB or XYZ file
        radius_file: Radius library
        seed: Random seed
        log: Output destination
        verbose: Per-orientation detail
        **options: Further SimulationConfig fields (collision_method, max_guesses, ...)

    Returns:
        Mean area [Å²]
    """
    config = SimulationConfig(
        n_theta_steps=n_theta_steps,
        probe_radius=probe_radius,
        n_phi_steps_max=n_phi_steps_max,
        seed=seed,
        verbose=verbose,
        **options,
    )
    result = CrossAreaEngine(config).run_files(structure_file, radius_file, log=log)
    return result.mean_area
