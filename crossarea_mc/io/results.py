"""
HDF5 export of simulation results.

Layout:
    /            attrs: version, mean_area, ese, box_side, probe_radius,
                        n_theta_steps, n_phi_steps_max, seed, collision_method
    /orientations  datasets: theta, phi, area, std_dev, p_hit, hit_count,
                             n_guesses, error_ratio, converged
"""

from dataclasses import fields
from pathlib import Path

import h5py
import numpy as np

import crossarea_mc
from crossarea_mc.core.results import OrientationEstimate, SimulationResult

RUN_ATTRS = ('mean_area', 'ese', 'box_side', 'probe_radius', 'n_theta_steps',
             'n_phi_steps_max', 'seed', 'collision_method')

ORIENTATION_COLUMNS = tuple(f.name for f in fields(OrientationEstimate))


def save_results(result: SimulationResult, path) -> Path:
    """Write a SimulationResult to an HDF5 file, replacing any existing file."""
    path = Path(path)

    with h5py.File(path, 'w') as f:
        f.attrs['version'] = crossarea_mc.__version__
        for name in RUN_ATTRS:
            f.attrs[name] = getattr(result, name)

        grp = f.create_group('orientations')
        for name in ORIENTATION_COLUMNS:
            grp.create_dataset(name, data=result.column(name))

    return path


def _native(value):
    if isinstance(value, bytes):
        return value.decode('utf-8')
    if hasattr(value, 'item'):
        return value.item()
    return value


def load_results(path) -> SimulationResult:
    """
    Read a file written by save_results.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If it is not an HDF5 file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Results file not found: {path}")
    if not h5py.is_hdf5(path):
        raise ValueError(f"File '{path}' is not a valid HDF5 file.")

    with h5py.File(path, 'r') as f:
        run = {name: _native(f.attrs[name]) for name in RUN_ATTRS}
        grp = f['orientations']
        columns = {name: np.asarray(grp[name][()]) for name in ORIENTATION_COLUMNS}

    n = len(columns['theta'])
    orientations = [
        OrientationEstimate(**{name: _native(columns[name][i]) for name in ORIENTATION_COLUMNS})
        for i in range(n)
    ]

    return SimulationResult(orientations=orientations, **run)
