from __future__ import annotations

import numpy as np

CELL_DTYPE = np.uint8
DEAD = 0
ALIVE = 1


def _check_dims(nx, ny, nz):
    for name, value in (("x_cells", nx), ("y_cells", ny), ("z_cells", nz)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
    return int(nx), int(ny), int(nz)


class Lattice:
    """
    Fixed-size 3D grid of binary cell states.

    Cells live in a C-ordered uint8 array of shape (nx, ny, nz), so the flat
    index of (x, y, z) is (x * ny + y) * nz + z. A 2D lattice is one with
    nz == 1.
    """

    def __init__(self, nx: int, ny: int, nz: int) -> None:
        nx, ny, nz = _check_dims(nx, ny, nz)
        self.cells = np.zeros((nx, ny, nz), dtype=CELL_DTYPE)

    @classmethod
    def from_array(cls, arr) -> "Lattice":
        """Build a lattice from any 3D array holding only 0 and 1."""
        arr = np.asarray(arr)
        if arr.ndim != 3:
            raise ValueError(f"Lattice arrays must be 3D, got shape {arr.shape}")
        if arr.size and not np.isin(arr, (DEAD, ALIVE)).all():
            raise ValueError("Lattice arrays may only contain 0 and 1")
        lattice = cls(*arr.shape)
        lattice.cells[...] = arr
        return lattice

    # ------------------------------------------------------------------ shape
    @property
    def shape(self) -> tuple[int, int, int]:
        return self.cells.shape

    @property
    def size(self) -> int:
        return self.cells.size

    @property
    def is_planar(self) -> bool:
        return self.cells.shape[2] <= 1

    def same_shape(self, other: "Lattice") -> bool:
        return self.cells.shape == other.cells.shape

    # ------------------------------------------------------------------ access
    def _check_coords(self, x, y, z):
        nx, ny, nz = self.cells.shape
        if not (0 <= x < nx and 0 <= y < ny and 0 <= z < nz):
            raise IndexError(
                f"Cell ({x}, {y}, {z}) outside lattice of shape {self.cells.shape}"
            )

    def get(self, x: int, y: int, z: int) -> int:
        self._check_coords(x, y, z)
        return int(self.cells[x, y, z])

    def set(self, x: int, y: int, z: int, value: int) -> None:
        self._check_coords(x, y, z)
        if value not in (DEAD, ALIVE):
            raise ValueError(f"Cell values must be 0 or 1, got {value!r}")
        self.cells[x, y, z] = value

    def view(self) -> np.ndarray:
        """Read-only view of the cells; only valid until the next generation."""
        out = self.cells.view()
        out.flags.writeable = False
        return out

    # ------------------------------------------------------------------ misc
    def live_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def clear(self) -> None:
        self.cells.fill(DEAD)

    def clear_boundary(self) -> None:
        """Kill the outermost layer; z has no boundary on a single-layer lattice."""
        self.cells[[0, -1], :, :] = DEAD
        self.cells[:, [0, -1], :] = DEAD
        if not self.is_planar:
            self.cells[:, :, [0, -1]] = DEAD

    def copy(self) -> "Lattice":
        return Lattice.from_array(self.cells)

    def __repr__(self) -> str:
        nx, ny, nz = self.cells.shape
        return f"Lattice({nx}, {ny}, {nz}, live={self.live_count()})"


def generate_field(
    x_cells: int,
    y_cells: int,
    z_cells: int,
    density: float = 0.0,
    rng=None,
) -> Lattice:
    """
    Create a lattice where each cell is alive with probability ``density``.

    ``rng`` is anything with a numpy-style ``random(size)`` method returning
    uniform [0, 1) samples (``np.random.Generator``, ``RandomState``). When it
    is omitted the global numpy RNG is used, so ``utils.set_seed`` makes runs
    reproducible. The default density of 0 gives an all-dead lattice.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must lie in [0, 1], got {density}")
    lattice = Lattice(x_cells, y_cells, z_cells)
    if density == 0.0:
        return lattice

    draw = np.random.random if rng is None else rng.random
    samples = np.asarray(draw(lattice.shape), dtype=np.float64)
    lattice.cells[...] = samples < density
    return lattice


__all__ = ["ALIVE", "DEAD", "Lattice", "generate_field"]
