"""
Generation step for the 2D/3D Life automaton.

The hot loops are numba kernels over the raw uint8 cell arrays. Only interior
cells are recomputed: the outermost layer along every axis is never written,
so it keeps whatever the destination buffer held (all dead when the buffer
comes from ``generate_field`` with density 0).
"""

from __future__ import annotations

import numpy as np
from numba import njit

from .lattice import Lattice

###############################################################################
# Rule constants
###############################################################################

# 3D: wide survival window, single birth count.
SURVIVE_MIN_3D = 5
SURVIVE_MAX_3D = 7
BIRTH_3D = 6

# 2D: classic Conway B3/S23.
SURVIVE_2D = (2, 3)
BIRTH_2D = 3


###############################################################################
# Kernels
###############################################################################


@njit(cache=True)
def _neighbors_3d(prev: np.ndarray, x: int, y: int, z: int) -> int:
    n = 0
    for dx in range(-1, 2):
        for dy in range(-1, 2):
            for dz in range(-1, 2):
                if dx == 0 and dy == 0 and dz == 0:
                    continue
                if prev[x + dx, y + dy, z + dz]:
                    n += 1
    return n


@njit(cache=True)
def _neighbors_2d(prev: np.ndarray, x: int, y: int, z: int) -> int:
    n = 0
    for dx in range(-1, 2):
        for dy in range(-1, 2):
            if dx == 0 and dy == 0:
                continue
            if prev[x + dx, y + dy, z]:
                n += 1
    return n


@njit(cache=True)
def _step_3d(prev: np.ndarray, nxt: np.ndarray) -> None:
    nx, ny, nz = prev.shape
    for x in range(1, nx - 1):
        for y in range(1, ny - 1):
            for z in range(1, nz - 1):
                n = _neighbors_3d(prev, x, y, z)
                alive = prev[x, y, z] > 0
                if alive and SURVIVE_MIN_3D <= n <= SURVIVE_MAX_3D:
                    nxt[x, y, z] = 1
                elif not alive and n == BIRTH_3D:
                    nxt[x, y, z] = 1
                else:
                    nxt[x, y, z] = 0


@njit(cache=True)
def _step_2d(prev: np.ndarray, nxt: np.ndarray) -> None:
    nx, ny, _ = prev.shape
    for x in range(1, nx - 1):
        for y in range(1, ny - 1):
            n = _neighbors_2d(prev, x, y, 0)
            alive = prev[x, y, 0] > 0
            # n == BIRTH_2D already covers the n == 3 half of survival
            if (alive and (n == SURVIVE_2D[0] or n == SURVIVE_2D[1])) or n == BIRTH_2D:
                nxt[x, y, 0] = 1
            else:
                nxt[x, y, 0] = 0


###############################################################################
# Public API
###############################################################################


def create_new_generation(prev: Lattice, next: Lattice) -> Lattice:
    """
    Overwrite every interior cell of ``next`` with the successor of ``prev``.

    Lattices with nz > 1 use the 3D rule (26 neighbours, survive on 5-7,
    born on exactly 6). Single-layer lattices use Conway's rule on the plane
    z = 0. Boundary cells of ``next`` are left untouched. Returns ``next``.
    """
    if not prev.same_shape(next):
        raise ValueError(
            f"Shape mismatch: prev {prev.shape} vs next {next.shape}"
        )
    if prev is next or np.shares_memory(prev.cells, next.cells):
        raise ValueError("prev and next must be distinct buffers")

    if prev.shape[2] > 1:
        _step_3d(prev.cells, next.cells)
    else:
        _step_2d(prev.cells, next.cells)
    return next


def count_neighbors(lattice: Lattice, x: int, y: int, z: int = 0) -> int:
    """Live neighbour count of an interior cell, as seen by the step kernels."""
    nx, ny, nz = lattice.shape
    if lattice.is_planar:
        interior = 1 <= x < nx - 1 and 1 <= y < ny - 1 and z == 0
        kernel = _neighbors_2d
    else:
        interior = 1 <= x < nx - 1 and 1 <= y < ny - 1 and 1 <= z < nz - 1
        kernel = _neighbors_3d
    if not interior:
        raise IndexError(f"({x}, {y}, {z}) is not an interior cell of {lattice.shape}")
    return int(kernel(lattice.cells, x, y, z))


__all__ = [
    "BIRTH_2D",
    "BIRTH_3D",
    "SURVIVE_2D",
    "SURVIVE_MAX_3D",
    "SURVIVE_MIN_3D",
    "count_neighbors",
    "create_new_generation",
]
