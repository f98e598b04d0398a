"""
Point-cloud rendering of a lattice with matplotlib.

The renderer consumes the read-only view published once per tick. Each live
cell becomes a marker at its coordinate minus half the lattice dimension, so
the cloud is centred on the origin; dead cells are simply not drawn.
"""

from __future__ import annotations

import numpy as np

ROTATION_STEP = 0.01  # radians per frame


def centered_positions(cells: np.ndarray) -> np.ndarray:
    """Return an (N, 3) float array of live-cell positions centred on the origin."""
    cells = np.asarray(cells)
    if cells.ndim != 3:
        raise ValueError(f"Expected a 3D cell array, got shape {cells.shape}")
    live = np.argwhere(cells > 0).astype(np.float64)
    offset = np.asarray(cells.shape, dtype=np.float64) / 2.0
    return live - offset


class MatplotlibRenderer:
    """
    Scatter-plot renderer for ``SimulationHandle``.

    Copies positions out of the view on every call, never the view itself,
    since the underlying buffer is reused as scratch on the next tick.
    """

    def __init__(self, size: float = 3, width: int = 500, height: int = 500, dpi: int = 100, spin: bool = True, interactive: bool = True):
        import matplotlib.pyplot as plt

        self._plt = plt
        self.fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self.ax = self.fig.add_subplot(projection="3d")
        self.fig.patch.set_facecolor("black")
        self.ax.set_facecolor("black")
        self.ax.set_axis_off()
        self.marker_size = size
        self.spin = spin
        self.interactive = interactive
        self.azimuth = 0.0
        self.frames = 0
        self._points = None
        self._limits = None

    def __call__(self, cells: np.ndarray) -> None:
        pos = centered_positions(cells)
        limits = tuple(np.asarray(cells.shape) / 2.0)
        if self._limits != limits:
            self._limits = limits
            for setter, half in zip(
                (self.ax.set_xlim, self.ax.set_ylim, self.ax.set_zlim), limits
            ):
                setter(-half, half)

        if self._points is not None:
            self._points.remove()
        self._points = self.ax.scatter(
            pos[:, 0], pos[:, 1], pos[:, 2],
            s=self.marker_size, c="#FFFFCC", alpha=0.6, depthshade=False,
        )

        if self.spin:
            self.azimuth += np.degrees(ROTATION_STEP)
            self.ax.view_init(elev=20.0, azim=self.azimuth)

        self.frames += 1
        if self.interactive:
            self._plt.pause(0.001)

    def save(self, path) -> None:
        self.fig.savefig(path, facecolor=self.fig.get_facecolor())

    def close(self) -> None:
        self._plt.close(self.fig)


__all__ = ["ROTATION_STEP", "MatplotlibRenderer", "centered_positions"]
