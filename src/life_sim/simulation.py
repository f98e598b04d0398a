"""
Simulation handle and frame schedulers.

A ``SimulationHandle`` owns one run of the automaton: the pair of lattice
buffers, the generation counter and the pending frame request. Frames come
from a scheduler standing in for the host's animation-frame callback, so the
handle itself stays synchronous and can be stepped by hand in tests.
"""

from __future__ import annotations

import enum
import itertools
import time
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import numpy as np

from .engine import create_new_generation
from .lattice import Lattice, generate_field

###############################################################################
# Configuration
###############################################################################

# camelCase keys accepted from presentation-side option objects
_OPTION_ALIASES = {
    "xCells": "x_cells",
    "yCells": "y_cells",
    "zCells": "z_cells",
}


@dataclass(frozen=True)
class GameOptions:
    """Lattice and presentation settings for one run."""
    width: int = 500
    height: int = 500
    size: float = 3
    x_cells: int = 75
    y_cells: int = 75
    z_cells: int = 75
    density: float = 0.15

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> "GameOptions":
        """
        Build options from a dict, falling back to defaults for missing keys
        and for keys explicitly set to None.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in (mapping or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown game option: {key}")
            if value is not None:
                values[name] = value
        return cls(**values)

    @property
    def dims(self) -> Tuple[int, int, int]:
        return self.x_cells, self.y_cells, self.z_cells

    def validate(self) -> "GameOptions":
        for name in ("x_cells", "y_cells", "z_cells"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if isinstance(self.density, bool) or not isinstance(self.density, (int, float, np.integer, np.floating)):
            raise ValueError(f"density must be a number, got {self.density!r}")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError(f"density must lie in [0, 1], got {self.density}")
        return self


###############################################################################
# Schedulers
###############################################################################

FrameCallback = Callable[[], None]


class ManualScheduler:
    """Frame source driven explicitly through ``advance``."""

    def __init__(self) -> None:
        self._pending: Dict[int, FrameCallback] = {}
        self._tokens = itertools.count(1)
        self.frames = 0

    def request_frame(self, callback: FrameCallback) -> int:
        token = next(self._tokens)
        self._pending[token] = callback
        return token

    def cancel_frame(self, token: int) -> None:
        self._pending.pop(token, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, frames: int = 1) -> int:
        """
        Fire the callbacks pending at the start of each frame.

        Callbacks requested while a frame is being fired wait for the next
        one. Returns the number of callbacks fired.
        """
        fired = 0
        for _ in range(frames):
            batch, self._pending = self._pending, {}
            self.frames += 1
            for callback in batch.values():
                callback()
                fired += 1
        return fired


class RealtimeScheduler(ManualScheduler):
    """Fires pending callbacks at a fixed frame rate on the calling thread."""

    def __init__(self, fps: float = 60.0, clock=time.perf_counter, sleep=time.sleep) -> None:
        super().__init__()
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.interval = 1.0 / fps
        self._clock = clock
        self._sleep = sleep

    def run(self, max_frames: Optional[int] = None) -> int:
        """Block until nothing is pending or ``max_frames`` have elapsed."""
        start_frames = self.frames
        deadline = self._clock()
        while self._pending:
            if max_frames is not None and self.frames - start_frames >= max_frames:
                break
            wait = deadline - self._clock()
            if wait > 0:
                self._sleep(wait)
            self.advance(1)
            deadline = max(deadline + self.interval, self._clock())
        return self.frames - start_frames


###############################################################################
# Simulation handle
###############################################################################


class SimulationState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class SimulationSnapshot:
    generation: int
    shape: Tuple[int, int, int]
    live: int
    density: float
    mode: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


Renderer = Callable[[np.ndarray], None]


class SimulationHandle:
    """
    One double-buffered simulation run.

    Responsibilities:
    1. Resolve options and allocate the lattice pair on ``start``.
    2. Step one generation per frame and swap buffers.
    3. Hand a read-only view of the current lattice to the renderer.
    """

    def __init__(
        self,
        scheduler: ManualScheduler,
        renderer: Optional[Renderer] = None,
        *,
        rng=None,
        buffer_hook: Optional[Callable[[Tuple[Lattice, Lattice]], None]] = None,
        verbose: bool = False,
    ) -> None:
        self.scheduler = scheduler
        self.renderer = renderer
        self.rng = rng
        self.buffer_hook = buffer_hook
        self.verbose = verbose

        self.state = SimulationState.IDLE
        self.options: Optional[GameOptions] = None
        self.generation = 0
        self._buffers: Optional[Tuple[Lattice, Lattice]] = None
        self._current_index = 0
        self._frame_token: Optional[int] = None

    # ------------------------------------------------------------------ state
    @property
    def running(self) -> bool:
        return self.state is SimulationState.RUNNING

    @property
    def current(self) -> Lattice:
        if self._buffers is None:
            raise RuntimeError("Simulation is not running")
        return self._buffers[self._current_index]

    @property
    def scratch(self) -> Lattice:
        if self._buffers is None:
            raise RuntimeError("Simulation is not running")
        return self._buffers[1 - self._current_index]

    # ------------------------------------------------------------------ public
    def start(self, options: GameOptions | Mapping[str, Any] | None = None, **overrides) -> None:
        """Allocate a fresh random lattice pair and begin ticking."""
        if self.running:
            raise RuntimeError("Simulation already running; call stop() first")

        if isinstance(options, GameOptions):
            opts = replace(options, **overrides) if overrides else options
        else:
            merged = dict(options or {})
            merged.update(overrides)
            opts = GameOptions.from_mapping(merged)
        opts.validate()

        current = generate_field(*opts.dims, opts.density, rng=self.rng)
        scratch = generate_field(*opts.dims)
        self._buffers = (current, scratch)
        self._current_index = 0
        self.options = opts
        self.generation = 0
        self.state = SimulationState.RUNNING

        if self.verbose:
            nx, ny, nz = opts.dims
            print(f"Starting Life run: {nx}x{ny}x{nz} ({self.mode}), "
                  f"density={opts.density}, live={current.live_count()}")

        self._frame_token = self.scheduler.request_frame(self._on_frame)

    def stop(self) -> None:
        """Cancel further frames and drop both buffers. Safe when idle."""
        if self._frame_token is not None:
            self.scheduler.cancel_frame(self._frame_token)
            self._frame_token = None
        if self.running and self.verbose:
            print(f"Stopped Life run after {self.generation} generations")
        self._buffers = None
        self.state = SimulationState.IDLE

    def restart(self, options: GameOptions | Mapping[str, Any] | None = None, **overrides) -> None:
        self.stop()
        self.start(options, **overrides)

    def tick(self) -> Lattice:
        """Advance one generation and publish it. Returns the new current lattice."""
        if not self.running:
            raise RuntimeError("tick() called while simulation is idle")

        prev, nxt = self.current, self.scratch
        create_new_generation(prev, nxt)
        self._current_index = 1 - self._current_index
        self.generation += 1
        if self.generation == 1:
            # the retired seed buffer becomes scratch; its random shell must not survive
            prev.clear_boundary()

        if self.buffer_hook is not None:
            self.buffer_hook(self._buffers)
        if self.renderer is not None:
            self.renderer(nxt.view())
        return nxt

    def run(self, generations: int) -> Lattice:
        """Tick ``generations`` times synchronously, bypassing the scheduler."""
        for _ in range(generations):
            self.tick()
        return self.current

    # ------------------------------------------------------------------ stats
    @property
    def mode(self) -> str:
        if self.options is None:
            return "none"
        return "3d" if self.options.z_cells > 1 else "2d"

    def live_count(self) -> int:
        return self.current.live_count()

    def snapshot(self) -> SimulationSnapshot:
        lattice = self.current
        return SimulationSnapshot(
            generation=self.generation,
            shape=lattice.shape,
            live=lattice.live_count(),
            density=lattice.live_count() / lattice.size,
            mode=self.mode,
        )

    # ------------------------------------------------------------------ frames
    def _on_frame(self) -> None:
        self._frame_token = None
        if not self.running:
            return
        self.tick()
        # the renderer may have stopped or restarted the run during this tick
        if self.running and self._frame_token is None:
            self._frame_token = self.scheduler.request_frame(self._on_frame)


__all__ = [
    "GameOptions",
    "ManualScheduler",
    "RealtimeScheduler",
    "SimulationHandle",
    "SimulationSnapshot",
    "SimulationState",
]
