"""
Loading atom coordinates and radii from disk.

Structure files are PDB (ATOM/HETATM records) or XYZ. Radii come from a
plain-text library, one entry per line:

    # comment
    C    1.70
    N    1.55
    CA   1.70      # atom names may be listed as well as elements

Lookup tries the PDB element column, then the atom name, then the first letter
of the atom name. Coordinates are centred on their centroid so every rotation
stays inside a square of side 2 * max|r|.
"""

from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np

from crossarea_mc.core.atoms import AtomSet

DATA_DIR = Path(__file__).parent.parent / 'data'


class StructureFormatError(ValueError):
    """Raised when a structure or radius file cannot be interpreted."""


def default_radius_library() -> Path:
    """Bondi van der Waals radii shipped with the package."""
    return DATA_DIR / 'bondi_radii.lib'


def load_radius_library(path) -> Dict[str, float]:
    """
    Read an atom-type → radius table.

    Parameters:
        path: Radius library file

    Returns:
        Mapping of upper-cased atom type to radius [Å]
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Radius library not found: {path}")

    radii = {}
    with open(path, 'r') as f:
        for lineno, line in enumerate(f, 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue

            parts = line.split()
            if len(parts) < 2:
                raise StructureFormatError(f"{path}:{lineno}: expected '<type> <radius>'")
            try:
                radius = float(parts[1])
            except ValueError:
                raise StructureFormatError(
                    f"{path}:{lineno}: radius '{parts[1]}' is not a number") from None
            if radius < 0:
                raise StructureFormatError(f"{path}:{lineno}: negative radius {radius}")

            radii[parts[0].upper()] = radius

    if not radii:
        raise StructureFormatError(f"{path}: no radii defined")

    return radii


def _element_from_name(name: str) -> str:
    letters = name.lstrip('0123456789')
    return letters[:1]


def read_pdb(path) -> Tuple[np.ndarray, List[Tuple[str, str]]]:
    """
    Parse ATOM/HETATM records.

    Returns:
        coords: (n_atoms, 3) [Å]
        labels: (atom name, element) per atom; element may be ''
    """
    coords = []
    labels = []

    with open(path, 'r') as f:
        for lineno, line in enumerate(f, 1):
            record = line[:6].strip()
            if record == 'ENDMDL':
                break  # first model only
            if record not in ('ATOM', 'HETATM'):
                continue

            try:
                x = float(line[30:38])
                y = float(line[38:46])
                z = float(line[46:54])
            except ValueError:
                raise StructureFormatError(
                    f"{path}:{lineno}: could not read coordinates") from None

            name = line[12:16].strip()
            element = line[76:78].strip() if len(line) >= 78 else ''
            coords.append((x, y, z))
            labels.append((name, element))

    return np.array(coords, dtype=np.float64).reshape(-1, 3), labels


def read_xyz(path) -> Tuple[np.ndarray, List[Tuple[str, str]]]:
    """
    Parse an XYZ file: atom count, comment line, then 'symbol x y z' rows.
    """
    with open(path, 'r') as f:
        lines = f.read().splitlines()

    try:
        n_atoms = int(lines[0].split()[0])
    except (IndexError, ValueError):
        raise StructureFormatError(f"{path}:1: expected the number of atoms") from None

    rows = [line for line in lines[2:] if line.strip()]
    if len(rows) < n_atoms:
        raise StructureFormatError(f"{path}: header declares {n_atoms} atoms, "
                                   f"found {len(rows)}")

    coords = np.zeros((n_atoms, 3))
    labels = []
    for i, line in enumerate(rows[:n_atoms]):
        parts = line.split()
        try:
            if len(parts) < 4:
                raise ValueError(line)
            coords[i] = [float(v) for v in parts[1:4]]
        except ValueError:
            raise StructureFormatError(f"{path}: atom {i + 1}: expected 'symbol x y z'") from None
        labels.append((parts[0], parts[0]))

    return coords, labels


def lookup_radius(name: str, element: str, library: Dict[str, float]) -> float:
    for key in (element, name, _element_from_name(name)):
        if key and key.upper() in library:
            return library[key.upper()]
    raise KeyError(name)


def load_structure(structure_file, radius_file) -> AtomSet:
    """
    Build a centred AtomSet from a structure file and a radius library.

    Parameters:
        structure_file: .pdb (or any PDB-formatted file) or .xyz
        radius_file: Radius library

    Raises:
        FileNotFoundError: If either file is missing
        StructureFormatError: If a file is malformed, has no atoms, or an
            atom type is missing from the library
    """
    structure_file = Path(structure_file)
    if not structure_file.exists():
        raise FileNotFoundError(f"Structure file not found: {structure_file}")

    library = load_radius_library(radius_file)

    if structure_file.suffix.lower() == '.xyz':
        coords, labels = read_xyz(structure_file)
    else:
        coords, labels = read_pdb(structure_file)

    if len(coords) == 0:
        raise StructureFormatError(f"{structure_file}: no atoms found")

    radii = np.zeros(len(coords))
    for i, (name, element) in enumerate(labels):
        try:
            radii[i] = lookup_radius(name, element, library)
        except KeyError:
            raise StructureFormatError(
                f"{structure_file}: atom {i + 1} ('{name}') has no radius in "
                f"{radius_file}") from None

    return AtomSet.centered(coords, radii, names=[name for name, _ in labels])
