"""
Point-in-shape collision testing on the projection plane.

A sampled point "collides" when it lies strictly within
probe_radius + atom_radius of some projected atom centre. Two interchangeable
testers are provided:

    LookupGrid                 spatial hash over square cells, 9-cell search
    ExhaustiveCollisionTester  scan of every atom (reference implementation)

Both expose rebuild(projected), test_collision(x, y) and
count_hits(points, accept_radius_sq), so the estimator does not care which
one it is given.
"""

import numpy as np
import numba
from typing import List, Tuple

# Sentinel for "no atom" in the cell heads and next links
NO_ATOM = -1

# Refuse grids that would not fit comfortably in memory
MAX_GRID_CELLS = 50_000_000


# ============================================================================
# Numba kernels
# ============================================================================
# No fastmath here: a point at exact tangency must compare as a miss in both
# testers.

@numba.njit(cache=True)
def cell_index(coord: float, half_side: float, cell_size: float,
               grid_length: int) -> int:
    """
    Grid row/column of a coordinate, clamped onto the grid.

    Clamping moves any index by at most as much as the unclamped difference,
    so two positions less than one cell apart still land in adjacent cells.
    """
    i = int(np.floor((coord + half_side) / cell_size))
    if i < 0:
        return 0
    if i >= grid_length:
        return grid_length - 1
    return i


@numba.njit(cache=True)
def fill_lookup_grid(cell_head: np.ndarray, next_atom: np.ndarray,
                     node_xy: np.ndarray, projected: np.ndarray,
                     half_side: float, cell_size: float, grid_length: int):
    """
    Relink every atom into the cell that contains its projected centre.

    Atoms are head-inserted, so the order within a cell is not meaningful.

    Parameters:
        cell_head: (grid_length**2,) first atom per cell, overwritten
        next_atom: (n_atoms,) next atom in the same cell, overwritten
        node_xy: (n_atoms, 2) cached projected centres, overwritten
        projected: (n_atoms, 2) projected centres for this orientation
    """
    for g in range(len(cell_head)):
        cell_head[g] = NO_ATOM

    for a in range(len(projected)):
        x = projected[a, 0]
        y = projected[a, 1]
        i = cell_index(x, half_side, cell_size, grid_length)
        j = cell_index(y, half_side, cell_size, grid_length)
        g = i * grid_length + j

        next_atom[a] = cell_head[g]
        cell_head[g] = a
        node_xy[a, 0] = x
        node_xy[a, 1] = y


@numba.njit(cache=True)
def square_collides(head: int, next_atom: np.ndarray, node_xy: np.ndarray,
                    radii: np.ndarray, probe_radius: float,
                    x: float, y: float) -> bool:
    """Walk one cell's atom list until a collision or the end of the list."""
    a = head
    while a != NO_ATOM:
        dx = x - node_xy[a, 0]
        dy = y - node_xy[a, 1]
        clearance = probe_radius + radii[a]
        if dx * dx + dy * dy < clearance * clearance:
            return True
        a = next_atom[a]
    return False


@numba.njit(cache=True)
def grid_test_collision(x: float, y: float, cell_head: np.ndarray,
                        next_atom: np.ndarray, node_xy: np.ndarray,
                        radii: np.ndarray, probe_radius: float,
                        half_side: float, cell_size: float,
                        grid_length: int) -> bool:
    """Test the point's own cell, then its (up to) eight neighbours."""
    i = cell_index(x, half_side, cell_size, grid_length)
    j = cell_index(y, half_side, cell_size, grid_length)

    if square_collides(cell_head[i * grid_length + j], next_atom, node_xy,
                       radii, probe_radius, x, y):
        return True

    for di in range(-1, 2):
        ii = i + di
        if ii < 0 or ii >= grid_length:
            continue
        for dj in range(-1, 2):
            jj = j + dj
            if jj < 0 or jj >= grid_length or (di == 0 and dj == 0):
                continue
            if square_collides(cell_head[ii * grid_length + jj], next_atom,
                               node_xy, radii, probe_radius, x, y):
                return True

    return False


@numba.njit(cache=True)
def grid_count_hits(points: np.ndarray, accept_radius_sq: float,
                    cell_head: np.ndarray, next_atom: np.ndarray,
                    node_xy: np.ndarray, radii: np.ndarray,
                    probe_radius: float, half_side: float,
                    cell_size: float, grid_length: int) -> int:
    """Count colliding points among those with x² + y² <= accept_radius_sq."""
    hits = 0
    for p in range(len(points)):
        x = points[p, 0]
        y = points[p, 1]
        if x * x + y * y <= accept_radius_sq:
            if grid_test_collision(x, y, cell_head, next_atom, node_xy, radii,
                                   probe_radius, half_side, cell_size,
                                   grid_length):
                hits += 1
    return hits


@numba.njit(cache=True)
def exhaustive_test_collision(x: float, y: float, projected: np.ndarray,
                              radii: np.ndarray, probe_radius: float) -> bool:
    """Test the point against every atom."""
    for a in range(len(projected)):
        dx = x - projected[a, 0]
        dy = y - projected[a, 1]
        clearance = probe_radius + radii[a]
        if dx * dx + dy * dy < clearance * clearance:
            return True
    return False


@numba.njit(cache=True)
def exhaustive_count_hits(points: np.ndarray, accept_radius_sq: float,
                          projected: np.ndarray, radii: np.ndarray,
                          probe_radius: float) -> int:
    hits = 0
    for p in range(len(points)):
        x = points[p, 0]
        y = points[p, 1]
        if x * x + y * y <= accept_radius_sq:
            if exhaustive_test_collision(x, y, projected, radii, probe_radius):
                hits += 1
    return hits


# ============================================================================
# Testers
# ============================================================================

class LookupGrid:
    """
    Spatial hash of projected atom centres.

    The plane [-L/2, L/2]² is split into square cells of side
    probe_radius + largest_atomic_radius, the largest possible interaction
    distance, so any atom that can collide with a point sits in the point's
    cell or one of its neighbours.

    Cell membership is an index-linked list: cell_head holds the first atom of
    each cell, next_atom the following one, NO_ATOM terminates. The node
    arrays are allocated once and relinked on every rebuild.
    """

    def __init__(self, radii: np.ndarray, probe_radius: float, box_side: float):
        """
        Parameters:
            radii: (n_atoms,) atomic radii [Å]
            probe_radius: Probe particle radius [Å]
            box_side: Side of the sampled square, including the probe margin [Å]
        """
        radii = np.ascontiguousarray(radii, dtype=np.float64)
        probe_radius = float(probe_radius)
        box_side = float(box_side)

        cell_size = probe_radius + float(np.max(radii))
        if cell_size <= 0.0:
            raise ValueError("Grid cell size (probe radius + largest atomic radius) "
                             "must be positive")

        grid_length = 1 + int(box_side / cell_size)
        n_cells = grid_length * grid_length
        if n_cells > MAX_GRID_CELLS:
            raise ValueError(f"Lookup grid would need {n_cells:,} cells "
                             f"(L={box_side:g}, cell={cell_size:g})")

        self.radii = radii
        self.probe_radius = probe_radius
        self.box_side = box_side
        self.cell_size = cell_size
        self.half_side = 0.5 * box_side
        self.grid_length = grid_length

        n_atoms = len(self.radii)
        self.cell_head = np.full(n_cells, NO_ATOM, dtype=np.int64)
        self.next_atom = np.full(n_atoms, NO_ATOM, dtype=np.int64)
        self.node_xy = np.zeros((n_atoms, 2), dtype=np.float64)

    def rebuild(self, projected: np.ndarray):
        """Re-bin the atoms for a new orientation."""
        fill_lookup_grid(self.cell_head, self.next_atom, self.node_xy,
                         np.ascontiguousarray(projected, dtype=np.float64),
                         self.half_side, self.cell_size, self.grid_length)

    def cell_of(self, x: float, y: float) -> Tuple[int, int]:
        return (cell_index(x, self.half_side, self.cell_size, self.grid_length),
                cell_index(y, self.half_side, self.cell_size, self.grid_length))

    def cell_members(self, i: int, j: int) -> List[int]:
        """Atom ids linked into cell (i, j), in list order."""
        members = []
        a = self.cell_head[i * self.grid_length + j]
        while a != NO_ATOM:
            members.append(int(a))
            a = self.next_atom[a]
        return members

    def test_collision(self, x: float, y: float) -> bool:
        return bool(grid_test_collision(
            float(x), float(y), self.cell_head, self.next_atom, self.node_xy,
            self.radii, self.probe_radius, self.half_side, self.cell_size,
            self.grid_length))

    def count_hits(self, points: np.ndarray, accept_radius_sq: float) -> int:
        return int(grid_count_hits(
            points, float(accept_radius_sq), self.cell_head, self.next_atom,
            self.node_xy, self.radii, self.probe_radius, self.half_side,
            self.cell_size, self.grid_length))

    def __repr__(self) -> str:
        return (f"LookupGrid({self.grid_length}x{self.grid_length}, "
                f"cell={self.cell_size:.2f} Å)")


class ExhaustiveCollisionTester:
    """Checks every atom for every point. Slow, but needs no index."""

    def __init__(self, radii: np.ndarray, probe_radius: float, box_side: float = None):
        self.radii = np.ascontiguousarray(radii, dtype=np.float64)
        self.probe_radius = float(probe_radius)
        self.projected = np.zeros((len(self.radii), 2), dtype=np.float64)

    def rebuild(self, projected: np.ndarray):
        self.projected[:] = projected

    def test_collision(self, x: float, y: float) -> bool:
        return bool(exhaustive_test_collision(
            float(x), float(y), self.projected, self.radii, self.probe_radius))

    def count_hits(self, points: np.ndarray, accept_radius_sq: float) -> int:
        return int(exhaustive_count_hits(
            points, float(accept_radius_sq), self.projected, self.radii,
            self.probe_radius))

    def __repr__(self) -> str:
        return f"ExhaustiveCollisionTester(n={len(self.radii)})"


COLLISION_METHODS = {
    'grid': LookupGrid,
    'exhaustive': ExhaustiveCollisionTester,
}


def make_collision_tester(method: str, radii: np.ndarray, probe_radius: float,
                          box_side: float):
    """
    Build a collision tester by name.

    Parameters:
        method: 'grid' or 'exhaustive'
        radii: Atomic radii [Å]
        probe_radius: Probe radius [Å]
        box_side: Enlarged box side [Å]
    """
    try:
        tester_cls = COLLISION_METHODS[method]
    except KeyError:
        raise ValueError(f"Unknown collision method '{method}'. "
                         f"Available: {list(COLLISION_METHODS.keys())}") from None
    return tester_cls(radii, probe_radius, box_side)
