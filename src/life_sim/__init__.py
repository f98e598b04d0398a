"""
Life Simulation Library

Generalised Game of Life on a 2D or 3D lattice:
- Lattice / generate_field: binary cell storage and random initialisation
- create_new_generation: the 2D (B3/S23) and 3D (B6/S567) step kernels
- SimulationHandle: double-buffered run driven by a frame scheduler
"""

from .lattice import Lattice, generate_field
from .engine import count_neighbors, create_new_generation
from .simulation import (
    GameOptions,
    ManualScheduler,
    RealtimeScheduler,
    SimulationHandle,
    SimulationSnapshot,
    SimulationState,
)
from . import utils

__all__ = [
    # Core
    "Lattice",
    "generate_field",
    "create_new_generation",
    "count_neighbors",
    # Simulation loop
    "GameOptions",
    "SimulationHandle",
    "SimulationSnapshot",
    "SimulationState",
    "ManualScheduler",
    "RealtimeScheduler",
    # Utilities
    "utils",
]
