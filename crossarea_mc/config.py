"""
Run configuration.

SimulationConfig holds every scalar parameter of a run. Values can come from
keyword arguments, a YAML run file (load_config) or the command line; the CLI
merges the file first and then its flags on top.

Example run file:

    n_theta_steps: 20
    probe_radius: 1.2
    seed: 42
    structure_file: protein.pdb
    radius_file: radii.lib
"""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml

from crossarea_mc.geometry.collision import COLLISION_METHODS

# Below this many guesses the error estimate is too unstable to stop on
MIN_GUESSES = 100
CHECK_INTERVAL = 100
ERROR_RATIO_TARGET = 0.001

# Run-file keys that are not simulation parameters
FILE_KEYS = ('structure_file', 'radius_file', 'log_file', 'output')


class ConfigurationError(ValueError):
    """Raised when a run parameter is missing or invalid."""


@dataclass
class SimulationConfig:
    """
    Parameters of one cross-section run.

    Attributes:
        n_theta_steps: Polar angle steps over (0, π], at least 2
        probe_radius: Radius of the colliding gas particle [Å]
        n_phi_steps_max: Azimuthal steps at the equator (default 2 * n_theta_steps)
        seed: Random seed; identical seeds give identical results
        verbose: Emit per-orientation progress lines
        collision_method: 'grid' or 'exhaustive'
        max_guesses: Guess cap per orientation (default floor(L²))
        min_guesses: Guesses before the stopping rule is consulted
        check_interval: Guesses between convergence checks
        error_ratio_target: Relative standard error that stops sampling
    """

    n_theta_steps: int
    probe_radius: float
    n_phi_steps_max: Optional[int] = None
    seed: int = 0
    verbose: bool = False
    collision_method: str = 'grid'
    max_guesses: Optional[int] = None
    min_guesses: int = MIN_GUESSES
    check_interval: int = CHECK_INTERVAL
    error_ratio_target: float = ERROR_RATIO_TARGET

    def __post_init__(self):
        if self.n_phi_steps_max is None and isinstance(self.n_theta_steps, int):
            self.n_phi_steps_max = 2 * self.n_theta_steps

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the configuration is usable."""
        errors = []

        # A single theta step is the pole alone, which gives one orientation
        if not isinstance(self.n_theta_steps, int) or self.n_theta_steps < 2:
            errors.append(f"n_theta_steps must be an integer >= 2, got {self.n_theta_steps!r}")
        if not isinstance(self.n_phi_steps_max, int) or self.n_phi_steps_max <= 0:
            errors.append(f"n_phi_steps_max must be a positive integer, got {self.n_phi_steps_max!r}")

        try:
            probe_ok = float(self.probe_radius) >= 0.0 and np.isfinite(self.probe_radius)
        except (TypeError, ValueError):
            probe_ok = False
        if not probe_ok:
            errors.append(f"probe_radius must be a finite number >= 0, got {self.probe_radius!r}")

        if not isinstance(self.seed, int) or self.seed < 0:
            errors.append(f"seed must be a non-negative integer, got {self.seed!r}")
        if self.collision_method not in COLLISION_METHODS:
            errors.append(f"collision_method must be one of {list(COLLISION_METHODS)}, "
                          f"got {self.collision_method!r}")
        if self.max_guesses is not None and (not isinstance(self.max_guesses, int)
                                             or self.max_guesses < 1):
            errors.append(f"max_guesses must be a positive integer, got {self.max_guesses!r}")
        if not isinstance(self.min_guesses, int) or self.min_guesses < 0:
            errors.append(f"min_guesses must be a non-negative integer, got {self.min_guesses!r}")
        if not isinstance(self.check_interval, int) or self.check_interval < 1:
            errors.append(f"check_interval must be a positive integer, got {self.check_interval!r}")
        if not (isinstance(self.error_ratio_target, (int, float)) and self.error_ratio_target > 0):
            errors.append(f"error_ratio_target must be > 0, got {self.error_ratio_target!r}")

        return errors

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        missing = [name for name in ('n_theta_steps', 'probe_radius') if data.get(name) is None]
        if missing:
            raise ConfigurationError(f"Missing required parameters: {missing}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_config(config: SimulationConfig,
                    raise_on_error: bool = True) -> Tuple[bool, List[str]]:
    """
    Check a configuration.

    Raises:
        ConfigurationError: If invalid and raise_on_error is True
    """
    errors = config.validate()
    if errors:
        if raise_on_error:
            raise ConfigurationError(
                f"Configuration validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {err}" for err in errors)
            )
        return False, errors
    return True, []


def load_config(path) -> Dict[str, Any]:
    """
    Read a YAML run file.

    Returns the raw mapping so callers can layer command-line values on top
    before building a SimulationConfig.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If it is not a mapping or has unknown keys
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(SimulationConfig)} | set(FILE_KEYS)
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown keys in {path}: {unknown}")

    return data
