"""
Command-line interface.

Usage:
    crossarea -a 20 -g 1.2 -i protein.pdb -r radii.lib
    crossarea -a 20 -g 1.2 -i protein.pdb -r radii.lib -s 42 -l run.log -v
    crossarea -c run.yaml -o results.h5 --progress
    python -m crossarea_mc ...
"""

import argparse
import sys
from typing import List, Optional

from crossarea_mc.config import (
    ConfigurationError,
    SimulationConfig,
    load_config,
    validate_config,
)
from crossarea_mc.io.results import save_results
from crossarea_mc.io.structure import StructureFormatError
from crossarea_mc.runlog import RunLog
from crossarea_mc.simulation.aggregator import InsufficientOrientationsError
from crossarea_mc.simulation.engine import CrossAreaEngine

USAGE = """\
Usage: crossarea -a <angle steps> -g <probe radius> -i <structure file> -r <radius library>
                 [-s <seed>] [-l <log file>] [-v] [-c <run.yaml>] [-o <results.h5>]
                 [--method grid|exhaustive] [--progress]

  -g, --gasradius   radius of the probe gas particle [Å]           (required)
  -r, --radlib      atomic radius library file                     (required)
  -i, --infile      structure file (.pdb or .xyz)                  (required)
  -a, --anglesteps  number of theta steps; phi uses twice as many  (required)
  -s, --seed        random seed (default 0)
  -l, --logfile     write progress and errors to this file
  -v, --verbose     report every projection
  -c, --config      YAML run file; command-line flags take precedence
  -o, --output      save per-orientation results to an HDF5 file
      --method      collision test: grid (default) or exhaustive
      --progress    show a progress bar on stderr
"""

# CLI flag -> run-file key
FLAG_KEYS = {
    'anglesteps': 'n_theta_steps',
    'gasradius': 'probe_radius',
    'seed': 'seed',
    'infile': 'structure_file',
    'radlib': 'radius_file',
    'logfile': 'log_file',
    'output': 'output',
    'method': 'collision_method',
}

REQUIRED = (
    ('n_theta_steps', '-a/--anglesteps'),
    ('probe_radius', '-g/--gasradius'),
    ('structure_file', '-i/--infile'),
    ('radius_file', '-r/--radlib'),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='crossarea',
        description="Monte Carlo collision cross section of a rigid molecular structure.",
        usage=USAGE,
        add_help=True,
    )
    parser.add_argument('-g', '--gasradius', type=float)
    parser.add_argument('-r', '--radlib')
    parser.add_argument('-i', '--infile')
    parser.add_argument('-s', '--seed', type=int)
    parser.add_argument('-a', '--anglesteps', type=int)
    parser.add_argument('-l', '--logfile')
    parser.add_argument('-v', '--verbose', action='store_true', default=None)
    parser.add_argument('-c', '--config')
    parser.add_argument('-o', '--output')
    parser.add_argument('--method', choices=['grid', 'exhaustive'])
    parser.add_argument('--progress', action='store_true')
    return parser


def collect_settings(args: argparse.Namespace) -> dict:
    """Run-file values overlaid with whatever was given on the command line."""
    settings = load_config(args.config) if args.config else {}

    for flag, key in FLAG_KEYS.items():
        value = getattr(args, flag)
        if value is not None:
            settings[key] = value
    if args.verbose:
        settings['verbose'] = True

    return settings


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = collect_settings(args)
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    missing = [flag for key, flag in REQUIRED if settings.get(key) is None]
    if missing:
        print(f"Missing required options: {', '.join(missing)}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    structure_file = settings.pop('structure_file')
    radius_file = settings.pop('radius_file')
    log_file = settings.pop('log_file', None)
    output = settings.pop('output', None)

    try:
        config = SimulationConfig.from_dict(settings)
        validate_config(config)
    except (ConfigurationError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    if log_file is not None:
        try:
            log = RunLog.from_logfile(log_file, verbose=config.verbose)
        except OSError:
            print(f"Could not open logfile, name: '{log_file}'", file=sys.stderr)
            return 1
    else:
        log = RunLog(verbose=config.verbose)

    with log:
        if config.verbose:
            log.info("Verbose output engaged!")

        try:
            result = CrossAreaEngine(config).run_files(
                structure_file, radius_file, log=log, progress=args.progress)
        except (FileNotFoundError, StructureFormatError, ConfigurationError,
                InsufficientOrientationsError) as e:
            log.error(f"Error: {e}")
            return 1

        if output is not None:
            path = save_results(result, output)
            log.info(f"Results saved: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
